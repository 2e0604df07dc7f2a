import logging

from src.integrations.nivoda.client import NivodaClientProtocol
from src.integrations.nivoda.models import DEFAULT_LIMIT, DiamondFilter
from src.models.dto.diamond import DiamondSearchRequest, DiamondSearchResponse

logger = logging.getLogger(__name__)

MAX_LIMIT = 100


def filter_from_request(body: DiamondSearchRequest) -> DiamondFilter:
    """Translate a storefront search body into a supplier filter."""
    limit = body.limit if body.limit and body.limit > 0 else DEFAULT_LIMIT
    carat = body.carat
    return DiamondFilter(
        shape=body.shape or None,
        carat_min=carat.min if carat else None,
        carat_max=carat.max if carat else None,
        limit=min(limit, MAX_LIMIT),
    )


async def search_diamonds(
    client: NivodaClientProtocol,
    body: DiamondSearchRequest,
) -> DiamondSearchResponse:
    diamond_filter = filter_from_request(body)
    if body.sort:
        # Supplier ordering is not exposed yet; results come back in supplier order
        logger.debug("Ignoring unsupported sort %r", body.sort)
    result = await client.search_diamonds(diamond_filter)
    return DiamondSearchResponse(items=result.items, total=result.total)
