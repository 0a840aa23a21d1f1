"""One-call entry points for waveform generation.

``generate`` is meant for one-time generation. When the same audio will be
drawn several times (different colors or scales), call ``compute_values`` once
and pass its result to ``draw_image`` for each variant.

Example:
    >>> from wavr.core.config.models import ImageOptions
    >>> from wavr.core.render.colors import StripeColor
    >>> img = generate(
    ...     "song.flac",
    ...     image_options=ImageOptions(
    ...         foreground_function=StripeColor("#ff0000", "#00ff00", "#0000ff"),
    ...         scale_x=10,
    ...         scale_y=2,
    ...     ),
    ... )
"""

from __future__ import annotations

from collections.abc import Sequence

from PIL import Image

from wavr.core.audio.compute import Magnitudes, compute_values
from wavr.core.audio.decoders import AudioSource, BlockDecoder
from wavr.core.config.models import ComputeOptions, ImageOptions
from wavr.core.render.renderer import render


def draw_image(values: Magnitudes | Sequence[float], options: ImageOptions | None = None) -> Image.Image:
    """Draw a waveform image from previously computed values."""
    return render(values, options)


def generate(
    source: AudioSource | BlockDecoder,
    compute_options: ComputeOptions | None = None,
    image_options: ImageOptions | None = None,
    *,
    decoder: str = "soundfile",
) -> Image.Image:
    """Decode ``source`` and draw its waveform.

    Equivalent to ``draw_image(compute_values(source, ...), image_options)``.

    Raises:
        OptionsError: On invalid compute options
        DecodeError: If the audio cannot be decoded
    """
    values = compute_values(source, compute_options, decoder=decoder)
    return draw_image(values, image_options)


__all__ = [
    "Magnitudes",
    "compute_values",
    "draw_image",
    "generate",
]
