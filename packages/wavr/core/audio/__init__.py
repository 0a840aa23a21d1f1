"""Audio decoding and sample reduction."""

from wavr.core.audio.decoders import (
    ArrayDecoder,
    BlockDecoder,
    LibrosaDecoder,
    SoundFileDecoder,
    open_decoder,
)
from wavr.core.audio.reducers import REDUCERS, SampleReducer, peak_samples, rms_samples

__all__ = [
    "REDUCERS",
    "ArrayDecoder",
    "BlockDecoder",
    "LibrosaDecoder",
    "SampleReducer",
    "SoundFileDecoder",
    "open_decoder",
    "peak_samples",
    "rms_samples",
]
