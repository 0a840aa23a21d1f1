"""Audio decoders that feed the reduction stage.

Decoding itself is delegated to external libraries (libsndfile through
``soundfile``, or ``librosa`` for formats libsndfile cannot read). Every
decoder exposes the same small surface: a sample rate, a channel count, and an
iterator of fixed-size blocks of interleaved float64 samples. The final block
may be short; an exhausted stream never yields an empty block.

Decoder failures are translated into the package's error kinds:

- ``FormatError``: unrecognised or unsupported format
- ``InvalidDataError``: recognised format, malformed stream
- ``UnexpectedEOSError``: stream ended before the frame count its header declared
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import logging
import math
from pathlib import Path
import re
from typing import BinaryIO, Protocol, runtime_checkable

import numpy as np
import soundfile as sf

from wavr.core.errors import FormatError, InvalidDataError, OptionsError, UnexpectedEOSError

logger = logging.getLogger(__name__)

AudioSource = str | Path | BinaryIO

# libsndfile error codes (sf_error)
_SF_ERR_SYSTEM = 2
_SF_ERR_MALFORMED_FILE = 3

# libsndfile logs "data : <declared> (should be <available>)" when it shortens a
# data chunk that runs past the end of the file
_TRUNCATED_CHUNK = re.compile(r"^\s*(data|SSND)\s*:\s*(\d+)\s*\(should be (\d+)\)", re.MULTILINE)


@runtime_checkable
class BlockDecoder(Protocol):
    """Source of fixed-size blocks of normalized, interleaved samples."""

    @property
    def sample_rate(self) -> int:
        """Frames per second of audio."""
        ...

    @property
    def channels(self) -> int:
        """Number of interleaved channels per frame."""
        ...

    def blocks(self, block_size: int) -> Iterator[np.ndarray]:
        """Yield 1-D float64 blocks of ``block_size`` samples (last may be short)."""
        ...


def rechunk(chunks: Iterable[np.ndarray], block_size: int) -> Iterator[np.ndarray]:
    """Flatten frame chunks and regroup them into blocks of ``block_size`` samples.

    Args:
        chunks: Arrays of shape (frames,) or (frames, channels), in stream order
        block_size: Samples per output block (>= 1)

    Yields:
        Interleaved float64 blocks; the final block holds the remainder
    """
    if block_size < 1:
        raise OptionsError("block_size", "block size must be at least 1")

    pending = np.empty(0, dtype=np.float64)
    for chunk in chunks:
        flat = np.asarray(chunk, dtype=np.float64).reshape(-1)
        pending = np.concatenate((pending, flat)) if pending.size else flat
        while pending.size >= block_size:
            yield pending[:block_size]
            pending = pending[block_size:]

    if pending.size:
        yield pending


class ArrayDecoder:
    """Decoder over samples already held in memory.

    Args:
        samples: 1-D mono samples, or a (frames, channels) array
        sample_rate: Frames per second
    """

    def __init__(self, samples: np.ndarray, sample_rate: int) -> None:
        if sample_rate < 1:
            raise OptionsError("sample_rate", "sample rate must be at least 1")

        data = np.asarray(samples, dtype=np.float64)
        if data.ndim == 1:
            data = data.reshape(-1, 1)
        elif data.ndim != 2:
            raise OptionsError("samples", f"expected 1-D or 2-D samples, got {data.ndim}-D")

        self._data = data
        self._sample_rate = int(sample_rate)

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def channels(self) -> int:
        return int(self._data.shape[1])

    def blocks(self, block_size: int) -> Iterator[np.ndarray]:
        return rechunk([self._data], block_size)


class SoundFileDecoder:
    """Streaming decoder backed by libsndfile (WAV, FLAC, OGG, ...).

    The file is opened at construction so format errors surface before any
    block is requested. The handle is closed once ``blocks()`` is exhausted, or
    by ``close()`` / the context manager.

    Args:
        source: Path or binary file object

    Raises:
        FormatError: If libsndfile does not recognise the stream
        InvalidDataError: If the stream header is malformed
    """

    def __init__(self, source: AudioSource) -> None:
        try:
            self._file = sf.SoundFile(source if not isinstance(source, Path) else str(source))
        except sf.LibsndfileError as e:
            raise _translate_open_error(e) from e

        self._truncation = _truncation_note(self._file)

        logger.debug(
            "Opened %s stream: %d Hz, %d channel(s), %d frames",
            self._file.format,
            self._file.samplerate,
            self._file.channels,
            self._file.frames,
        )

    @property
    def sample_rate(self) -> int:
        return int(self._file.samplerate)

    @property
    def channels(self) -> int:
        return int(self._file.channels)

    def blocks(self, block_size: int) -> Iterator[np.ndarray]:
        frames_per_read = max(1, math.ceil(block_size / self.channels))
        return rechunk(self._read_frames(frames_per_read), block_size)

    def _read_frames(self, frames_per_read: int) -> Iterator[np.ndarray]:
        expected = self._file.frames if self._file.seekable() else None
        read = 0
        try:
            while True:
                try:
                    chunk = self._file.read(frames_per_read, dtype="float64", always_2d=True)
                except sf.LibsndfileError as e:
                    raise InvalidDataError(f"Failed to read audio frames: {e}") from e

                if not len(chunk):
                    break

                read += len(chunk)
                yield chunk
        finally:
            self.close()

        if self._truncation is not None:
            raise UnexpectedEOSError(f"Stream ended before its header said: {self._truncation}")
        if expected is not None and read < expected:
            raise UnexpectedEOSError(
                f"Stream ended after {read} of {expected} frames declared by its header"
            )

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> SoundFileDecoder:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class LibrosaDecoder:
    """Whole-file decoder backed by ``librosa.load``.

    Covers formats libsndfile cannot read (e.g. MP3, via librosa's fallback
    loaders). The file is decoded at native rate with channels preserved.

    Args:
        source: Path or binary file object

    Raises:
        FormatError: If no backend can decode the stream
    """

    def __init__(self, source: AudioSource) -> None:
        import librosa

        try:
            y, sr = librosa.load(source, sr=None, mono=False)
        except FileNotFoundError:
            raise
        except Exception as e:
            raise FormatError(f"Unable to decode audio with librosa: {e}") from e

        # librosa returns (channels, frames) for multichannel audio
        samples = y.T if y.ndim == 2 else y
        self._inner = ArrayDecoder(samples, int(sr))

    @property
    def sample_rate(self) -> int:
        return self._inner.sample_rate

    @property
    def channels(self) -> int:
        return self._inner.channels

    def blocks(self, block_size: int) -> Iterator[np.ndarray]:
        return self._inner.blocks(block_size)


DECODERS = {
    "soundfile": SoundFileDecoder,
    "librosa": LibrosaDecoder,
}


def open_decoder(source: AudioSource | BlockDecoder, backend: str = "soundfile") -> BlockDecoder:
    """Open a decoder for ``source``.

    Args:
        source: Path, binary file object, or an existing decoder (returned as-is)
        backend: Decoder backend name ("soundfile" or "librosa")

    Returns:
        Decoder ready to yield blocks

    Raises:
        OptionsError: If backend is unknown
    """
    if isinstance(source, BlockDecoder):
        return source

    try:
        decoder_cls = DECODERS[backend]
    except KeyError:
        raise OptionsError("decoder", f"unknown decoder backend {backend!r}") from None

    return decoder_cls(source)


def _truncation_note(sound_file: sf.SoundFile) -> str | None:
    """Data chunk size mismatch reported by libsndfile on open, if any."""
    match = _TRUNCATED_CHUNK.search(sound_file.extra_info or "")
    if match is None:
        return None

    chunk, declared, available = match.groups()
    if int(declared) <= int(available):
        return None
    return f"{chunk} chunk declares {declared} bytes, {available} present"


def _translate_open_error(error: sf.LibsndfileError) -> Exception:
    if error.code == _SF_ERR_MALFORMED_FILE:
        return InvalidDataError(f"Malformed audio stream: {error.error_string}")
    if error.code == _SF_ERR_SYSTEM:
        return OSError(error.error_string)
    return FormatError(f"Unsupported audio format: {error.error_string}")


__all__ = [
    "DECODERS",
    "ArrayDecoder",
    "AudioSource",
    "BlockDecoder",
    "LibrosaDecoder",
    "SoundFileDecoder",
    "open_decoder",
    "rechunk",
]
