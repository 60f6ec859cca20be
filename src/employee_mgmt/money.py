"""Decimal helpers for currency amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def round_to_cents(amount: Decimal) -> Decimal:
    """Round to 2 decimal places using ROUND_HALF_UP."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_decimal(value: object) -> Decimal | None:
    """Parse user input into a Decimal; None for missing or unparseable values.

    Floats go through ``repr`` so 0.1 becomes Decimal("0.1") and not its binary
    expansion.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, float):
        value = repr(value)
    text = str(value).strip().replace(",", "").lstrip("$")
    if not text:
        return None
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None


def format_currency(amount: Decimal | None) -> str:
    """Render an amount as ``$1,234.56``."""
    if amount is None:
        return "$0.00"
    return f"${round_to_cents(amount):,.2f}"


def coerce_money(value: object) -> Decimal:
    """Aggregate or driver value to cents; NULL sums become 0.00."""
    parsed = to_decimal(value)
    return round_to_cents(parsed) if parsed is not None else ZERO
