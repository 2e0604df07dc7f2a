from pydantic import BaseModel

from src.models.dto.diamond import DiamondRecord

DEFAULT_LIMIT = 24


class DiamondFilter(BaseModel):
    shape: str | None = None
    carat_min: float | None = None
    carat_max: float | None = None
    limit: int = DEFAULT_LIMIT
    offset: int = 0
    search_on_markup_price: bool = True


class DiamondSearchResult(BaseModel):
    items: list[DiamondRecord] = []
    total: int = 0
