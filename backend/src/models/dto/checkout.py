from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.models.dto.diamond import DiamondRecord


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ring_variant_id: str | int | None = Field(
        default=None,
        validation_alias=AliasChoices("ringVariantId", "baseVariantId", "ring_variant_id"),
    )
    quantity: int = Field(default=1, ge=1)
    ring_config: dict[str, Any] | None = None
    diamond: DiamondRecord | None = None
    diamond_price_cents: float | None = Field(default=None, allow_inf_nan=False)
    line_item_properties: dict[str, Any] | None = None


class CheckoutResponse(BaseModel):
    """Exactly one of the two URLs is set."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    checkout_url: str | None = None
    cart_url: str | None = None
