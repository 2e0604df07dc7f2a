import logging
import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable

import httpx

from src.core.config import settings
from src.core.exceptions import AuthenticationError, ProxyError, SupplierError
from src.core.token_cache import TokenCache
from src.integrations.nivoda.adapters import SchemaAdapter, get_adapter
from src.integrations.nivoda.models import DEFAULT_LIMIT, DiamondFilter, DiamondSearchResult
from src.mappers.diamond import diamond_from_raw
from src.models.dto.diamond import DiamondRecord

logger = logging.getLogger(__name__)

# Map storefront UI labels to Nivoda shape codes
SHAPE_MAP: dict[str, str] = {
    "Brilliant Round": "ROUND",
    "Asscher": "ASSCHER",
    "Baguette": "BAGUETTE",
    "Cushion": "CUSHION",
    "Emerald": "EMERALD",
    "Heart": "HEART",
    "Marquise": "MARQUISE",
    "Oval": "OVAL",
    "Pear": "PEAR",
    "Princess": "PRINCESS",
    "Radiant": "RADIANT",
}


def build_diamond_query(diamond_filter: DiamondFilter) -> dict:
    """Build the Nivoda ``DiamondQuery`` input from a filter.

    Unknown shape labels are dropped rather than rejected. A size range is
    only sent when at least one carat bound is present.
    """
    query: dict = {}
    if diamond_filter.search_on_markup_price:
        query["search_on_markup_price"] = True

    mapped_shape = SHAPE_MAP.get(diamond_filter.shape) if diamond_filter.shape else None
    if mapped_shape:
        query["shapes"] = [mapped_shape]

    if diamond_filter.carat_min is not None or diamond_filter.carat_max is not None:
        query["sizes"] = [{"from": diamond_filter.carat_min, "to": diamond_filter.carat_max}]

    return query


@runtime_checkable
class NivodaClientProtocol(Protocol):
    @property
    def is_configured(self) -> bool: ...
    async def search_diamonds(self, diamond_filter: DiamondFilter) -> DiamondSearchResult: ...


class NivodaClient:
    def __init__(
        self,
        *,
        endpoint: str | None = None,
        username: str | None = None,
        password: str | None = None,
        schema: str | None = None,
        token_ttl_seconds: float | None = None,
        request_total_count: bool | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._endpoint = endpoint or settings.nivoda_endpoint
        self._username = settings.nivoda_username if username is None else username
        self._password = settings.nivoda_password if password is None else password
        self._adapter: SchemaAdapter = get_adapter(schema or settings.nivoda_schema)
        self._request_total_count = (
            settings.nivoda_request_total_count if request_total_count is None else request_total_count
        )
        self._timeout = timeout or settings.http_timeout_seconds
        self._transport = transport
        self.token_cache = TokenCache(
            self._authenticate,
            ttl_seconds=token_ttl_seconds or settings.nivoda_token_ttl_seconds,
            clock=clock,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self._username and self._password)

    @property
    def adapter(self) -> SchemaAdapter:
        return self._adapter

    async def _post(
        self,
        payload: dict,
        *,
        headers: dict[str, str] | None = None,
        auth: httpx.Auth | tuple[str, str] | None = None,
        error_cls: type[ProxyError] = SupplierError,
    ) -> dict:
        """POST a GraphQL payload and return its ``data`` object."""
        request_headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if headers:
            request_headers.update(headers)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(
                    self._endpoint,
                    headers=request_headers,
                    json=payload,
                    auth=auth,
                )
        except httpx.HTTPError as e:
            logger.error("Nivoda request failed: %s", e)
            raise error_cls(f"Nivoda request failed: {e.__class__.__name__}") from e

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if resp.status_code >= 400 or body.get("errors"):
            logger.error("Nivoda error (%d): %s", resp.status_code, body)
            raise error_cls(
                "Nivoda auth error" if error_cls is AuthenticationError else "Nivoda error",
                status_code=resp.status_code,
                payload=body.get("errors") or body,
            )
        data = body.get("data")
        return data if isinstance(data, dict) else {}

    async def _authenticate(self) -> str:
        if not self.is_configured:
            raise AuthenticationError("Missing NIVODA_USERNAME or NIVODA_PASSWORD")
        if self._adapter.auth_document is None:
            raise AuthenticationError(f"Schema {self._adapter.name!r} does not use token login")

        data = await self._post(
            {
                "query": self._adapter.auth_document,
                "variables": {"username": self._username, "password": self._password},
            },
            error_cls=AuthenticationError,
        )
        token = self._adapter.extract_token(data)
        if not token:
            raise AuthenticationError("Nivoda auth error: no token in response")
        return token

    async def _credentials(self) -> dict:
        """Keyword arguments for ``_post`` carrying this schema's credentials."""
        if self._adapter.auth_scheme == "basic":
            if not self.is_configured:
                raise AuthenticationError("Missing NIVODA_USERNAME or NIVODA_PASSWORD")
            return {"auth": (self._username, self._password)}
        token = await self.token_cache.get_token()
        return {"headers": {"Authorization": f"Bearer {token}"}}

    async def search_diamonds(self, diamond_filter: DiamondFilter) -> DiamondSearchResult:
        variables = {
            "offset": diamond_filter.offset,
            "limit": diamond_filter.limit or DEFAULT_LIMIT,
            "query": build_diamond_query(diamond_filter),
        }
        credentials = await self._credentials()
        try:
            data = await self._post(
                {
                    "query": self._adapter.search_document(self._request_total_count),
                    "variables": variables,
                },
                **credentials,
            )
        except SupplierError as e:
            if e.status_code == 401 and self._adapter.auth_scheme == "bearer":
                # Next request logs in again; this one still fails
                self.token_cache.invalidate()
            raise

        items = [diamond_from_raw(raw) for raw in self._adapter.extract_items(data)]
        total = len(items)
        if self._request_total_count:
            reported = self._adapter.extract_total(data)
            if reported is not None:
                total = reported

        logger.info(
            "Nivoda search returned %d diamonds (shape=%r, limit=%d, total=%d)",
            len(items), diamond_filter.shape, variables["limit"], total,
        )
        return DiamondSearchResult(items=items, total=total)


class FakeNivodaClient:
    """Test fake returning predefined diamonds."""

    def __init__(
        self,
        diamonds: list[DiamondRecord] | None = None,
        error: Exception | None = None,
        configured: bool = True,
    ):
        self.diamonds = diamonds or []
        self.error = error
        self.configured = configured
        self.filters: list[DiamondFilter] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def search_diamonds(self, diamond_filter: DiamondFilter) -> DiamondSearchResult:
        self.filters.append(diamond_filter)
        if self.error is not None:
            raise self.error
        items = self.diamonds[: diamond_filter.limit]
        return DiamondSearchResult(items=items, total=len(items))
