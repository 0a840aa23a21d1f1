"""Configuration management for wavr."""

from wavr.core.config.loader import (
    detect_format,
    load_config,
    load_waveform_config,
)
from wavr.core.config.models import (
    ColorConfig,
    ComputeOptions,
    ImageOptions,
    LoggingConfig,
    WaveformConfig,
)

__all__ = [
    "ColorConfig",
    "ComputeOptions",
    "ImageOptions",
    "LoggingConfig",
    "WaveformConfig",
    "detect_format",
    "load_config",
    "load_waveform_config",
]
