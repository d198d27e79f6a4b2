"""Rounding and number rendering helpers shared by the calculators."""

import math
from decimal import ROUND_HALF_UP, Decimal

# Products such as 0.325 * 70 carry binary noise well below this precision.
_NOISE_DIGITS = 9


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero, ignoring float representation noise."""
    if not math.isfinite(value):
        return value
    normalized = Decimal(repr(round(value, _NOISE_DIGITS)))
    quantum = Decimal(1).scaleb(-digits)
    return float(normalized.quantize(quantum, rounding=ROUND_HALF_UP))


def round1(value: float) -> float:
    """Round to one decimal place."""
    return round_half_up(value, 1)


def round_int(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(round_half_up(value))


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0`` for whole values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
