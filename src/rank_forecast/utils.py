"""Numeric helpers shared by the rating and simulation code."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity.

    Python's ``round`` uses banker's rounding; reference traces were produced
    with half-up rounding, so ``round_half_up(2.5) == 3`` and
    ``round_half_up(-2.5) == -2``.
    """
    return math.floor(value + 0.5)


def round_to(value: float, places: int) -> float:
    """Half-up rounding to a fixed number of decimal places."""
    factor = 10**places
    return round_half_up(value * factor) / factor


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))
