from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Certificate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    carats: float | str | None = None
    shape: str | None = None
    color: str | None = None
    clarity: str | None = None
    cut: str | None = None
    cert_number: str | None = None


class DiamondRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str | None = None
    price_cents: int | None = None
    image: str | None = None
    certificate: Certificate = Field(default_factory=Certificate)


class CaratRange(BaseModel):
    min: float | None = None
    max: float | None = None


class DiamondSearchRequest(BaseModel):
    shape: str | None = Field(default=None, max_length=64)
    carat: CaratRange | None = None
    sort: str | None = Field(default=None, max_length=64)
    limit: int | None = None


class DiamondSearchResponse(BaseModel):
    items: list[DiamondRecord]
    total: int
