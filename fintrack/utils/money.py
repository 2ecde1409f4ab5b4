"""Currency arithmetic helpers"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENTS = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a monetary value to Decimal without binary float artifacts"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() gives the shortest repr, so 0.1 becomes Decimal("0.1")
        return Decimal(str(value))
    return Decimal(value)


def round_cents(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half up"""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def round_whole(value: float) -> int:
    """Round to the nearest whole currency unit, halves rounding up"""
    return int(math.floor(value + 0.5))
