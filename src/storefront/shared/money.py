"""Decimal helpers for prices kept as two-place strings."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """Parse a price-like value; raises ``ValueError`` for anything non-numeric."""
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, AttributeError) as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


def quantize(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(value) -> str:
    """Render an amount as a two-place string, e.g. ``"21.60"``."""
    return str(quantize(to_decimal(value)))


def to_cents(value) -> int:
    """Smallest currency unit, as payment processors expect it."""
    return int((quantize(to_decimal(value)) * 100).to_integral_value(rounding=ROUND_HALF_UP))