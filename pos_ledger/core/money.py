"""
Money normalization.

Every stored amount is an integer in minor units. Amounts supplied by the
caller are stored as given; amounts derived here (line subtotals) all go
through one MoneyNormalizer so the rounding policy lives in a single place.
"""
import math
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP
from enum import Enum
from typing import Union


Number = Union[int, float, Decimal]

# Largest value a SQLite INTEGER column holds
MAX_MINOR_UNITS = 2 ** 63 - 1


class RoundingPolicy(str, Enum):
    FLOOR = "floor"
    NEAREST = "nearest"


_ROUNDING_MODES = {
    RoundingPolicy.FLOOR: ROUND_FLOOR,
    RoundingPolicy.NEAREST: ROUND_HALF_UP,
}


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Monetary value must be finite, got {value}")
        return value
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Monetary value must be finite, got {value}")
    return Decimal(str(value))


def as_minor_units(value: Number) -> int:
    """
    Exact integer amount for a caller-supplied money value.

    Raises:
        ValueError: If the value is not numeric, not a whole number, or does
            not fit a signed 64-bit integer
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError(f"{value!r} is not a number")
    amount = _to_decimal(value)
    if amount != amount.to_integral_value():
        raise ValueError(f"{value!r} is not a whole number of minor units")
    if abs(amount) > MAX_MINOR_UNITS:
        raise ValueError(f"{value!r} is too large")
    return int(amount)


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(_to_decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


class MoneyNormalizer:
    """Converts fractional amounts into canonical non-negative minor units."""

    def __init__(self, policy: RoundingPolicy = RoundingPolicy.FLOOR):
        self.policy = RoundingPolicy(policy)

    def normalize(self, value: Number) -> int:
        rounded = _to_decimal(value).to_integral_value(rounding=_ROUNDING_MODES[self.policy])
        return max(0, int(rounded))

    __call__ = normalize

    def line_amount(self, unit_price: int, quantity: Number) -> int:
        """
        Derived line subtotal for ``quantity`` units at ``unit_price``.

        The product is computed in Decimal: 100 x 0.29 gives 29, where float
        multiplication gives 28.999999999999996 and floors to 28.
        """
        return self.normalize(_to_decimal(unit_price) * _to_decimal(quantity))

    def __repr__(self) -> str:
        return f"MoneyNormalizer(policy={self.policy.value!r})"
