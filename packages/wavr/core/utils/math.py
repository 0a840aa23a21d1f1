"""Small numeric helpers shared by the color policies and renderer."""

from __future__ import annotations

import math
from typing import TypeVar

Number = TypeVar("Number", int, float)


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value, keeping the input's type
    """
    return max(min_val, min(max_val, value))


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b (t=0 gives a, t=1 gives b)."""
    return float(a) + (float(b) - float(a)) * t


def finite_or_zero(value: float) -> float:
    """Replace NaN and infinities with 0.0."""
    return value if math.isfinite(value) else 0.0
