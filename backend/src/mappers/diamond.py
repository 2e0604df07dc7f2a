import math
from decimal import ROUND_HALF_UP, Decimal

from src.models.dto.diamond import Certificate, DiamondRecord


def price_to_cents(price) -> int | None:
    """Convert a major-unit price (number or numeric string) to integer cents.

    Missing or non-numeric prices give None, never 0.
    """
    if price is None or isinstance(price, bool):
        return None
    if isinstance(price, str):
        try:
            price = float(price.strip())
        except ValueError:
            return None
    elif not isinstance(price, (int, float)):
        return None
    if not math.isfinite(price):
        return None
    return int(round(float(price) * 100))


def cents_to_price(cents: int | float) -> str:
    """Format cents as a two-decimal major-unit string, e.g. 150050 -> '1500.50'."""
    amount = Decimal(str(cents)) / 100
    return str(amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def diamond_from_raw(raw: dict) -> DiamondRecord:
    """Normalize one supplier search item into a DiamondRecord."""
    diamond = raw.get("diamond") or {}
    cert = diamond.get("certificate") or {}
    raw_id = raw.get("id")
    return DiamondRecord(
        id=str(raw_id) if raw_id is not None else None,
        price_cents=price_to_cents(raw.get("price")),
        image=diamond.get("image") or None,
        certificate=Certificate(
            carats=cert.get("carats") or None,
            shape=cert.get("shape") or None,
            color=cert.get("color") or None,
            clarity=cert.get("clarity") or None,
            cut=cert.get("cut") or None,
            cert_number=_str_or_none(cert.get("certNumber")),
        ),
    )


def _str_or_none(value) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
