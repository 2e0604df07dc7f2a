import logging

from fastapi import APIRouter, Depends

from src.api.dependencies.clients import get_nivoda_client
from src.core.exceptions import ProxyError, UpstreamServiceError
from src.integrations.nivoda.client import NivodaClientProtocol
from src.models.dto.diamond import DiamondSearchRequest, DiamondSearchResponse
from src.services import diamond_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["diamonds"])


@router.post("/diamonds", response_model=DiamondSearchResponse)
async def search_diamonds(
    body: DiamondSearchRequest | None = None,
    client: NivodaClientProtocol = Depends(get_nivoda_client),
):
    try:
        return await diamond_service.search_diamonds(client, body or DiamondSearchRequest())
    except ProxyError as e:
        logger.error(
            "Error in /diamonds: %s", e,
            extra={"error_type": type(e).__name__, "upstream_status": e.status_code, "upstream_payload": e.payload},
        )
        raise UpstreamServiceError("Could not load diamonds") from e
