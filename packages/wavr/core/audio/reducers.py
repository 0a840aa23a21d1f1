"""Sample reduction functions.

A sample reducer collapses one block of normalized audio samples into a single
magnitude. Reducers are plain callables, so any function with the same
signature can be swapped in without touching the renderer.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
import math

import numpy as np

SampleReducer = Callable[[Sequence[float] | np.ndarray], float]


def rms_samples(samples: Sequence[float] | np.ndarray) -> float:
    """Root mean square of a block of samples.

    Measures magnitude over the entire block. Sign and order of the samples do
    not affect the result.

    Args:
        samples: Normalized samples in [-1.0, 1.0]

    Returns:
        RMS magnitude, or NaN for an empty block (no data)

    Example:
        >>> rms_samples([0.1, -0.2, 0.3, -0.4, 0.5])
        0.33166247903554
    """
    arr = np.asarray(samples, dtype=np.float64)
    if arr.size == 0:
        return math.nan

    return float(np.sqrt(np.sum(arr * arr) / arr.size))


def peak_samples(samples: Sequence[float] | np.ndarray) -> float:
    """Largest absolute sample in a block, or NaN for an empty block."""
    arr = np.asarray(samples, dtype=np.float64)
    if arr.size == 0:
        return math.nan

    return float(np.max(np.abs(arr)))


REDUCERS: dict[str, SampleReducer] = {
    "rms": rms_samples,
    "peak": peak_samples,
}


def get_reducer(name: str) -> SampleReducer:
    """Look up a reducer by its registered name.

    Raises:
        KeyError: If no reducer is registered under ``name``
    """
    try:
        return REDUCERS[name]
    except KeyError:
        raise KeyError(f"Unknown sample reducer: {name!r} (options: {sorted(REDUCERS)})") from None


__all__ = [
    "REDUCERS",
    "SampleReducer",
    "get_reducer",
    "peak_samples",
    "rms_samples",
]
