"""Exception hierarchy for waveform generation.

Two families are raised by this package:

- ``OptionsError``: invalid configuration, detected before any audio is read.
- ``DecodeError`` subclasses: failures reported by the audio decoder. Callers
  can branch on the known kinds (format, invalid data, unexpected end of
  stream) and treat anything else as an unknown failure.
"""

from __future__ import annotations


class WaveformError(Exception):
    """Base exception for all waveform errors."""


class OptionsError(WaveformError, ValueError):
    """Invalid option passed to a compute or render operation.

    Attributes:
        option: Name of the offending option (e.g. "resolution")
        reason: Human-readable explanation
    """

    def __init__(self, option: str, reason: str) -> None:
        self.option = option
        self.reason = reason
        super().__init__(str(self))

    def __str__(self) -> str:
        """Format error as ``option: reason``."""
        return f"{self.option}: {self.reason}"


class DecodeError(WaveformError):
    """Audio decoder failed to produce samples."""


class FormatError(DecodeError):
    """Input audio format is not recognised or not supported by the decoder."""


class InvalidDataError(DecodeError):
    """Input audio format is recognised, but the stream is invalid or corrupt."""


class UnexpectedEOSError(DecodeError):
    """Stream ended before the amount of audio its header declared."""


__all__ = [
    "DecodeError",
    "FormatError",
    "InvalidDataError",
    "OptionsError",
    "UnexpectedEOSError",
    "WaveformError",
]
