import logging
from typing import Protocol, runtime_checkable

import httpx

from src.core.config import settings
from src.core.exceptions import CheckoutError
from src.integrations.shopify.models import LineItem, VariantInput

logger = logging.getLogger(__name__)


@runtime_checkable
class ShopifyClientProtocol(Protocol):
    @property
    def is_configured(self) -> bool: ...
    async def create_variant(self, product_id: str, variant: VariantInput) -> str: ...
    async def create_draft_order(self, line_items: list[LineItem]) -> str: ...


class ShopifyClient:
    """Shopify Admin REST client for the two calls checkout needs."""

    def __init__(
        self,
        *,
        store_domain: str | None = None,
        access_token: str | None = None,
        api_version: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._store_domain = settings.shopify_store_domain if store_domain is None else store_domain
        self._access_token = settings.shopify_admin_token if access_token is None else access_token
        self._api_version = api_version or settings.shopify_api_version
        self._timeout = timeout or settings.http_timeout_seconds
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._store_domain and self._access_token)

    @property
    def admin_base(self) -> str:
        domain = self._store_domain.strip().rstrip("/")
        if not domain.startswith(("http://", "https://")):
            domain = f"https://{domain}"
        return f"{domain}/admin/api/{self._api_version}"

    def _headers(self) -> dict[str, str]:
        return {
            "X-Shopify-Access-Token": self._access_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _post(self, path: str, payload: dict) -> dict:
        url = f"{self.admin_base}/{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(url, headers=self._headers(), json=payload)
        except httpx.HTTPError as e:
            logger.error("Shopify POST %s failed: %s", path, e)
            raise CheckoutError(f"Shopify request failed: {e.__class__.__name__}") from e

        try:
            body = resp.json() if resp.content else {}
        except ValueError:
            body = {}

        if resp.status_code >= 400:
            logger.error("Shopify POST %s failed (%d): %s", path, resp.status_code, resp.text)
            errors = body.get("errors") if isinstance(body, dict) else None
            raise CheckoutError(
                f"Shopify POST {path} failed",
                status_code=resp.status_code,
                payload=errors or body,
            )
        if not isinstance(body, dict):
            raise CheckoutError(f"Shopify POST {path} returned a non-object body", status_code=resp.status_code)
        return body

    async def create_variant(self, product_id: str, variant: VariantInput) -> str:
        """Create a variant on ``product_id`` and return the new variant id."""
        body = await self._post(
            f"products/{product_id}/variants.json",
            {"variant": variant.to_payload()},
        )
        variant_id = (body.get("variant") or {}).get("id")
        if not variant_id:
            raise CheckoutError("Shopify variant response missing id", payload=body)
        logger.info("Created Shopify variant %s (sku=%s) on product %s", variant_id, variant.sku, product_id)
        return str(variant_id)

    async def create_draft_order(self, line_items: list[LineItem]) -> str:
        """Create a draft order and return its invoice (checkout) URL."""
        body = await self._post(
            "draft_orders.json",
            {"draft_order": {"line_items": [item.to_payload() for item in line_items]}},
        )
        draft_order = body.get("draft_order") or {}
        invoice_url = draft_order.get("invoice_url")
        if not invoice_url:
            raise CheckoutError("Shopify draft order response missing invoice_url", payload=body)
        logger.info("Created Shopify draft order %s with %d line items", draft_order.get("id"), len(line_items))
        return invoice_url


class FakeShopifyClient:
    """Test fake recording the calls checkout makes."""

    def __init__(
        self,
        *,
        configured: bool = True,
        invoice_url: str = "https://shop.example.com/invoices/abc123",
        variant_id: str = "44000000000001",
        variant_error: Exception | None = None,
        order_error: Exception | None = None,
    ):
        self.configured = configured
        self.invoice_url = invoice_url
        self.variant_id = variant_id
        self.variant_error = variant_error
        self.order_error = order_error
        self.created_variants: list[tuple[str, VariantInput]] = []
        self.draft_orders: list[list[LineItem]] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def create_variant(self, product_id: str, variant: VariantInput) -> str:
        self.created_variants.append((product_id, variant))
        if self.variant_error is not None:
            raise self.variant_error
        return self.variant_id

    async def create_draft_order(self, line_items: list[LineItem]) -> str:
        self.draft_orders.append(line_items)
        if self.order_error is not None:
            raise self.order_error
        return self.invoice_url
