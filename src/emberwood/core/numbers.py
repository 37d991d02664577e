"""
Numeric coercion helpers shared by every economy transition.

The economy must never halt the game loop, so malformed numbers are
coerced rather than rejected: anything that is not a finite number
falls back to a safe default.
"""

from __future__ import annotations

import math
from typing import Any


def finite_number(value: Any, fallback: float = 0.0) -> float:
    """Return ``value`` as a float, or ``fallback`` if it is not finite."""
    if isinstance(value, bool):
        return float(value)
    try:
        n = float(value)
    except (TypeError, ValueError):
        return fallback
    return n if math.isfinite(n) else fallback


def is_finite_number(value: Any) -> bool:
    """True for ints/floats (not bools) that are finite."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with .5 going toward +inf (2.5 -> 3, -2.5 -> -2).

    Non-finite input (including products that overflow to inf) yields 0.
    """
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def clamp_round(value: Any, lo: int, hi: int) -> int:
    """Round half-up and clamp to [lo, hi]. Non-finite input yields ``lo``."""
    n = finite_number(value, fallback=math.nan)
    if math.isnan(n):
        return lo
    rounded = round_half_up(n)
    if rounded < lo:
        return lo
    if rounded > hi:
        return hi
    return rounded


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp without rounding. Non-finite input yields ``lo``."""
    n = finite_number(value, fallback=lo)
    return min(max(n, lo), hi)
