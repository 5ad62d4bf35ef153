"""Integer coercion and rounding helpers shared by the pure calculators."""

from __future__ import annotations

import math
import re
from fractions import Fraction
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_int(value: Any) -> int:
    """Parse a form value as an integer, falling back to 0.

    Strings are read up to the first non-digit, so "12abc" is 12 and "3.7" is 3.
    Floats truncate toward zero. Anything else (None, bools, NaN, garbage) is 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def round_half_up(value: Fraction | int) -> int:
    """Round to the nearest integer, halves toward +infinity (-2.5 -> -2)."""
    return math.floor(Fraction(value) + Fraction(1, 2))


def percent_of(amount: int, percentage: int) -> int:
    """Return ``amount * percentage / 100`` rounded half up, computed exactly."""
    return round_half_up(Fraction(amount * percentage, 100))
