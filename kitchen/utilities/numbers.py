"""Numeric coercion helpers shared by the reporting logic.

API payloads are loosely typed: quantities may arrive as strings, ``None``
or be missing altogether. Everything numeric goes through ``to_quantity``
so the reports only ever see finite, non-negative floats.
"""
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any


def to_quantity(value: Any) -> float:
    """Coerce *value* to a finite float >= 0 (anything else becomes 0)."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return number


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def round2(value: float) -> float:
    """Round to 2 decimals, halves going up (0.125 -> 0.13)."""
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (display percentages)."""
    return int(math.floor(value + 0.5))


__all__ = ["to_quantity", "clamp", "round2", "round_half_up"]
