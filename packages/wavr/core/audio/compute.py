"""Reduction stage: audio blocks to an ordered sequence of magnitudes.

``compute_values`` is typically run once per audio stream. Its result can be
passed to the renderer any number of times with different image options,
which is much cheaper than decoding the stream again.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import logging
import math

import numpy as np

from wavr.core.audio.decoders import AudioSource, BlockDecoder, open_decoder
from wavr.core.audio.reducers import SampleReducer
from wavr.core.config.models import ComputeOptions
from wavr.core.errors import OptionsError
from wavr.core.utils.logging import log_performance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Magnitudes:
    """Ordered magnitudes computed from an audio stream.

    Attributes:
        values: One magnitude per block, in temporal order. May contain NaN
            for blocks a reducer could not measure.
        peak: Largest non-NaN value (0.0 when there is none).
    """

    values: tuple[float, ...] = ()
    peak: float = 0.0

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def __getitem__(self, index: int) -> float:
        return self.values[index]


def block_size_for(sample_rate: int, channels: int, resolution: int) -> int:
    """Number of interleaved samples reduced into one magnitude.

    Example:
        >>> block_size_for(44100, 2, 4)
        22050
    """
    if resolution < 1:
        raise OptionsError("resolution", "resolution cannot be 0")
    return max(1, (sample_rate * channels) // resolution)


def reduce_blocks(blocks: Iterable[np.ndarray], function: SampleReducer) -> Magnitudes:
    """Apply a reducer to each block, keeping arrival order.

    Args:
        blocks: Sample blocks in stream order
        function: Reducer applied to every block

    Returns:
        Magnitudes with the running peak

    Raises:
        OptionsError: If function is None (checked before any block is read)
    """
    if function is None:
        raise OptionsError("function", "function cannot be nil")

    values: list[float] = []
    peak = 0.0
    for block in blocks:
        value = float(function(block))
        values.append(value)
        if not math.isnan(value) and value > peak:
            peak = value

    return Magnitudes(values=tuple(values), peak=peak)


@log_performance
def compute_values(
    source: AudioSource | BlockDecoder,
    options: ComputeOptions | None = None,
    *,
    decoder: str = "soundfile",
) -> Magnitudes:
    """Decode an audio stream and reduce it to magnitudes.

    Args:
        source: Path, binary file object, or an open decoder
        options: Resolution and reducer; defaults to one RMS value per second
        decoder: Backend used when ``source`` is not already a decoder

    Returns:
        Magnitudes for the whole stream

    Raises:
        OptionsError: If the decoder backend is unknown
        DecodeError: If the decoder fails; nothing partial is returned
    """
    opts = options or ComputeOptions()
    stream = open_decoder(source, backend=decoder)
    block_size = block_size_for(stream.sample_rate, stream.channels, opts.resolution)
    logger.debug(
        "Reducing %d Hz x %d channel(s) audio in blocks of %d samples",
        stream.sample_rate,
        stream.channels,
        block_size,
    )

    result = reduce_blocks(stream.blocks(block_size), opts.function)
    logger.info(f"Computed {len(result)} values (peak {result.peak:.3f})")
    return result


__all__ = [
    "Magnitudes",
    "block_size_for",
    "compute_values",
    "reduce_blocks",
]
