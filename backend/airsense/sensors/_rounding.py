"""Rounding helpers shared by the sensor computations."""

import math
from decimal import ROUND_HALF_UP, Decimal

TENTH = Decimal("0.1")
# Floats at or above this magnitude have no fractional part
_INTEGRAL_FLOAT = 2.0**52


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2).

    The built-in ``round`` uses banker's rounding, which would shift scores and
    ppm values at exact .5 boundaries.
    """
    return math.floor(value + 0.5)


def round_to_tenth(value: float) -> float:
    """Round to one decimal place, halves away from zero (21.25 -> 21.3).

    Works on the exact binary value of the float, so 1.15 (stored as
    1.14999...) gives 1.1, the same as JavaScript's ``toFixed(1)``.
    """
    if abs(value) >= _INTEGRAL_FLOAT:
        return float(value)
    return float(Decimal(value).quantize(TENTH, rounding=ROUND_HALF_UP))
