"""Waveform image renderer.

Draws a sequence of magnitudes as a vertically symmetric band around the
horizontal midline of an RGBA image:

- Each magnitude becomes ``scale_x`` adjacent columns.
- Replicated columns are pulled toward the midline the further they sit from
  the center of their group (``sharpness``), so scaled images look curved
  rather than blocky.
- With clipping compensation, the amplitude scale shrinks as the loudest
  magnitude grows, so loud passages stay inside the image.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging
import math

from PIL import Image

from wavr.core.config.models import ImageOptions
from wavr.core.render.colors import ColorFunc, ColorPolicy, SolidColor
from wavr.core.utils.logging import log_performance
from wavr.core.utils.math import finite_or_zero

logger = logging.getLogger(__name__)

# Base image height, before Y-axis scaling
IMAGE_HEIGHT = 128

# Scale applied to magnitude * image height
DEFAULT_AMPLITUDE_SCALE = 3.00

# Clipping compensation schedule: starting at CLIPPING_THRESHOLD, every
# CLIPPING_STEP of peak magnitude removes CLIPPING_DECREMENT from the scale.
# Heuristic tuned by eye, not derived.
CLIPPING_THRESHOLD = 0.30
CLIPPING_STEP = 0.05
CLIPPING_DECREMENT = 0.25

# Lowest amplitude scale clipping compensation may reach
MIN_AMPLITUDE_SCALE = 0.25


def clipping_scale(peak: float, scale: float = DEFAULT_AMPLITUDE_SCALE) -> float:
    """Amplitude scale after clipping compensation for a given peak magnitude.

    Example:
        >>> clipping_scale(0.2)
        3.0
        >>> clipping_scale(0.5)
        2.0
    """
    if not peak > CLIPPING_THRESHOLD:
        return scale

    # Steps of the schedule strictly below peak; rounded to absorb float error
    steps = math.ceil(round((peak - CLIPPING_THRESHOLD) / CLIPPING_STEP, 9))
    return max(scale - steps * CLIPPING_DECREMENT, MIN_AMPLITUDE_SCALE)


def band_height(value: float, image_height: int, amplitude_scale: float) -> int:
    """Height in pixels of the band drawn for one magnitude (never negative)."""
    return max(0, math.floor(finite_or_zero(value) * image_height * amplitude_scale))


def column_offset(i: int, peak: int, sharpness: int) -> int:
    """Vertical offset of replicated column ``i`` for the lower half of the band.

    The center column (``i == peak``) is not moved; the others move toward the
    midline by ``sharpness`` pixels per column of distance.
    """
    return -abs(i - peak) * sharpness


def _reset(policy: ColorFunc) -> None:
    if isinstance(policy, ColorPolicy):
        policy.reset()


@log_performance
def render(values: Sequence[float], options: ImageOptions | None = None) -> Image.Image:
    """Render magnitudes into a new RGBA waveform image.

    Args:
        values: Magnitudes in temporal order (NaN draws nothing)
        options: Image options; defaults to black on white, unscaled

    Returns:
        Image of ``len(values) * scale_x`` by ``128 * scale_y`` pixels. An
        empty sequence gives a zero-width image.
    """
    opts = options or ImageOptions()
    values = list(values)

    width = len(values) * opts.scale_x
    height = IMAGE_HEIGHT * opts.scale_y
    max_n, max_x, max_y = len(values) - 1, width - 1, height - 1

    background = opts.background_policy()
    foreground = opts.foreground_policy()
    _reset(background)
    _reset(foreground)

    if isinstance(background, SolidColor):
        img = Image.new("RGBA", (width, height), background.color)
    else:
        img = Image.new("RGBA", (width, height))

    if width == 0:
        logger.debug("No values to draw, returning empty image")
        return img

    pixels = img.load()

    if not isinstance(background, SolidColor):
        for x in range(width):
            n = x // opts.scale_x
            for y in range(height):
                pixels[x, y] = background(n, x, y, max_n, max_x, max_y)

    amplitude_scale = DEFAULT_AMPLITUDE_SCALE
    if opts.scale_clipping:
        peak_value = max((finite_or_zero(v) for v in values), default=0.0)
        amplitude_scale = clipping_scale(peak_value)
    logger.debug(f"Drawing {len(values)} values at amplitude scale {amplitude_scale:.2f}")

    mid_y = height // 2
    peak = opts.scale_x // 2
    offsets = [column_offset(i, peak, opts.sharpness) for i in range(opts.scale_x)]
    # Offsets move rows at most this far, so rows beyond it never land in the image
    reach = peak * opts.sharpness

    for n, value in enumerate(values):
        scaled = band_height(value, height, amplitude_scale)
        top = mid_y - scaled // 2
        x = n * opts.scale_x

        for y in range(max(top, -reach), min(top + scaled, height + reach)):
            for i, offset in enumerate(offsets):
                # Invert on the top half so both halves curve toward the midline
                py = y - offset if y < mid_y else y + offset
                px = x + i
                if 0 <= py < height:
                    pixels[px, py] = foreground(n, px, py, max_n, max_x, max_y)

    return img


__all__ = [
    "CLIPPING_DECREMENT",
    "CLIPPING_STEP",
    "CLIPPING_THRESHOLD",
    "DEFAULT_AMPLITUDE_SCALE",
    "IMAGE_HEIGHT",
    "MIN_AMPLITUDE_SCALE",
    "band_height",
    "clipping_scale",
    "column_offset",
    "render",
]
