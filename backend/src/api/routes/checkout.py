import logging

from fastapi import APIRouter, Depends

from src.api.dependencies.clients import get_shopify_client
from src.core.exceptions import BadRequestError, ProxyError, UpstreamServiceError, ValidationError
from src.integrations.shopify.client import ShopifyClientProtocol
from src.models.dto.checkout import CheckoutRequest, CheckoutResponse
from src.services import checkout_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checkout"])


@router.post("/checkout", response_model=CheckoutResponse, response_model_exclude_none=True)
async def checkout(
    body: CheckoutRequest | None = None,
    store: ShopifyClientProtocol = Depends(get_shopify_client),
):
    try:
        return await checkout_service.checkout(store, body or CheckoutRequest())
    except ValidationError as e:
        raise BadRequestError(e.message) from e
    except ProxyError as e:
        logger.error(
            "Error in /checkout: %s", e,
            extra={"error_type": type(e).__name__, "upstream_status": e.status_code, "upstream_payload": e.payload},
        )
        raise UpstreamServiceError("Checkout error") from e
