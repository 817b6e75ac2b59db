from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def d(val) -> Decimal:
    """Coerce incoming values to Decimal safely."""
    if isinstance(val, Decimal):
        return val
    if val is None:
        return ZERO
    return Decimal(str(val))


def round_money(amount) -> Decimal:
    """Round half-up to two places, the single rounding rule for currency."""
    return d(amount).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
