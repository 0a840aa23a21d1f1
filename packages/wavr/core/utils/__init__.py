"""Shared utilities for wavr."""

from wavr.core.utils.math import clamp, finite_or_zero, lerp

__all__ = [
    "clamp",
    "finite_or_zero",
    "lerp",
]
