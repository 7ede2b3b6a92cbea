"""Money helpers shared by the billing core.

Amounts are ``Decimal`` values at cent scale. Persistence stores integer
cents, so conversions in both directions live here.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """Coerce a number to a cent-scale Decimal, rounding half-up."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(amount: Decimal) -> int:
    return int((to_money(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def percentage(part: int, whole: int) -> float:
    """Share of ``part`` in ``whole`` as a 0-100 percentage (0 when empty)."""
    if whole <= 0:
        return 0.0
    return part / whole * 100
