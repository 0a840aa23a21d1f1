"""Shared pytest fixtures for wavr tests."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

# ============================================================================
# Audio Parameters
# ============================================================================


@pytest.fixture
def sample_rate() -> int:
    """Standard sample rate for tests."""
    return 44100


def _tone(sample_rate: int, duration: float, frequency: float = 440.0, amplitude: float = 0.5) -> np.ndarray:
    n_samples = int(round(sample_rate * duration))
    t = np.arange(n_samples, dtype=np.float64) / sample_rate
    return amplitude * np.sin(2 * np.pi * frequency * t)


@pytest.fixture
def make_tone():
    """Factory for sine tones: make_tone(sample_rate, duration, frequency=440.0, amplitude=0.5)."""
    return _tone


# ============================================================================
# Audio File Fixtures
# ============================================================================


@pytest.fixture
def tone_5s_wav(tmp_path: Path, sample_rate: int) -> Path:
    """5 seconds of 440Hz mono tone, 16-bit WAV."""
    path = tmp_path / "tone_5s.wav"
    sf.write(str(path), _tone(sample_rate, 5.0), sample_rate, subtype="PCM_16")
    return path


@pytest.fixture
def tone_4_5s_wav(tmp_path: Path, sample_rate: int) -> Path:
    """4.5 seconds of 440Hz mono tone, 16-bit WAV."""
    path = tmp_path / "tone_4_5s.wav"
    sf.write(str(path), _tone(sample_rate, 4.5), sample_rate, subtype="PCM_16")
    return path


@pytest.fixture
def stereo_2s_flac(tmp_path: Path, sample_rate: int) -> Path:
    """2 seconds of stereo tone (left loud, right quiet), FLAC."""
    path = tmp_path / "stereo_2s.flac"
    left = _tone(sample_rate, 2.0, amplitude=0.8)
    right = _tone(sample_rate, 2.0, amplitude=0.2)
    sf.write(str(path), np.column_stack((left, right)), sample_rate, subtype="PCM_16")
    return path


@pytest.fixture
def empty_wav(tmp_path: Path, sample_rate: int) -> Path:
    """Valid WAV file holding zero frames."""
    path = tmp_path / "empty.wav"
    sf.write(str(path), np.zeros(0, dtype=np.float64), sample_rate, subtype="PCM_16")
    return path


@pytest.fixture
def garbage_file(tmp_path: Path) -> Path:
    """512 bytes that are not audio in any format."""
    path = tmp_path / "garbage.wav"
    path.write_bytes(b"not audio at all! " * 28 + b"padding!")
    return path


@pytest.fixture
def truncated_wav(tmp_path: Path, tone_5s_wav: Path) -> Path:
    """First half of the bytes of tone_5s_wav; its header still declares 5 seconds."""
    data = tone_5s_wav.read_bytes()
    path = tmp_path / "truncated.wav"
    path.write_bytes(data[: len(data) // 2])
    return path


# ============================================================================
# Color Fixtures
# ============================================================================


@pytest.fixture
def red() -> tuple[int, int, int, int]:
    return (255, 0, 0, 255)


@pytest.fixture
def green() -> tuple[int, int, int, int]:
    return (0, 255, 0, 255)


@pytest.fixture
def blue() -> tuple[int, int, int, int]:
    return (0, 0, 255, 255)


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def restore_logging():
    """Restore root logger handlers and level after a test reconfigures logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
