import json
import logging

from src.core.config import settings
from src.core.exceptions import CheckoutError, ValidationError
from src.integrations.shopify.client import ShopifyClientProtocol
from src.integrations.shopify.models import LineItem, VariantInput
from src.mappers.diamond import cents_to_price
from src.models.dto.checkout import CheckoutRequest, CheckoutResponse
from src.models.dto.diamond import DiamondRecord

logger = logging.getLogger(__name__)

_VARIANT_GID_PREFIX = "gid://shopify/ProductVariant/"


def normalize_variant_id(ref: str | int) -> str:
    """Reduce a Shopify variant GID to its numeric id; plain ids pass through."""
    value = str(ref).strip()
    if value.startswith(_VARIANT_GID_PREFIX):
        value = value[len(_VARIANT_GID_PREFIX):].split("?", 1)[0]
    return value


def stringify_properties(*sources: dict | None) -> dict[str, str]:
    """Merge property mappings into Shopify's string-only key/value form.

    Later sources win. None and empty-string values are dropped.
    """
    merged: dict[str, str] = {}
    for source in sources:
        for key, value in (source or {}).items():
            if value is None or value == "":
                continue
            merged[str(key)] = value if isinstance(value, str) else json.dumps(value)
    return merged


def cart_url(variant_id: str, quantity: int) -> str:
    base = settings.storefront_url.rstrip("/")
    return f"{base}/cart/{variant_id}:{quantity}"


def diamond_variant_input(diamond: DiamondRecord, price_cents: float) -> VariantInput:
    cert = diamond.certificate
    if cert.carats and cert.shape:
        title = f"{cert.carats}ct {cert.shape} Diamond"
    else:
        title = "Diamond"
    sku = cert.cert_number or f"DIA-{diamond.id or 'unknown'}"
    return VariantInput(title=title, sku=sku, price=cents_to_price(price_cents))


def diamond_properties(diamond: DiamondRecord, price_cents: float) -> dict[str, str]:
    cert = diamond.certificate
    return stringify_properties(
        {
            "Diamond ID": diamond.id,
            "Certificate": cert.cert_number,
            "Carat": cert.carats,
            "Shape": cert.shape,
            "Color": cert.color,
            "Clarity": cert.clarity,
            "Cut": cert.cut,
            "Diamond Price": cents_to_price(price_cents),
            # Underscore-prefixed properties are hidden from the customer
            "_diamond": diamond.model_dump(by_alias=True),
        }
    )


async def checkout(store: ShopifyClientProtocol, req: CheckoutRequest) -> CheckoutResponse:
    """Turn a ring configuration (plus optional diamond) into a checkout link."""
    if req.ring_variant_id is None or not str(req.ring_variant_id).strip():
        raise ValidationError("Missing ringVariantId")
    ring_variant_id = normalize_variant_id(req.ring_variant_id)

    if not store.is_configured:
        logger.warning("Shopify not configured, falling back to cart link for variant %s", ring_variant_id)
        return CheckoutResponse(cart_url=cart_url(ring_variant_id, req.quantity))

    line_items = [
        LineItem(
            variant_id=ring_variant_id,
            quantity=req.quantity,
            properties=stringify_properties(req.ring_config, req.line_item_properties),
        )
    ]

    created_variant_id: str | None = None
    price_cents = req.diamond_price_cents
    if req.diamond is not None and price_cents is not None and price_cents > 0:
        product_id = settings.shopify_diamond_product_id
        if not product_id:
            raise CheckoutError("SHOPIFY_DIAMOND_PRODUCT_ID is not configured")
        created_variant_id = await store.create_variant(
            product_id, diamond_variant_input(req.diamond, price_cents),
        )
        line_items.append(
            LineItem(
                variant_id=created_variant_id,
                quantity=1,
                properties=diamond_properties(req.diamond, price_cents),
            )
        )

    try:
        invoice_url = await store.create_draft_order(line_items)
    except CheckoutError:
        if created_variant_id:
            logger.warning(
                "Draft order failed after creating diamond variant %s; variant left in place",
                created_variant_id,
            )
        raise

    logger.info(
        "Checkout created for ring variant %s (%d line items)", ring_variant_id, len(line_items),
    )
    return CheckoutResponse(checkout_url=invoice_url)
