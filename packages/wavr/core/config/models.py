"""Configuration models for wavr.

Two layers of configuration live here:

- Runtime options (``ComputeOptions``, ``ImageOptions``) passed to the
  reduction stage and the renderer. They may carry callables (reducers, color
  policies) and are validated eagerly, before any audio is read.
- File configuration (``WaveformConfig``) loaded from JSON or YAML. It holds
  only serializable values and converts itself into runtime options.
"""

from __future__ import annotations

import random

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from wavr.core.audio.reducers import REDUCERS, SampleReducer, get_reducer, rms_samples
from wavr.core.render.colors import (
    BLACK,
    COLOR_FUNCTIONS,
    DEFAULT_CHECKER_SIZE,
    RGBA,
    WHITE,
    AlternateColor,
    ColorFunc,
    SolidColor,
    build_color_function,
    parse_color,
)


class ComputeOptions(BaseModel):
    """Options for the reduction stage.

    Immutable after creation.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    resolution: int = Field(
        default=1,
        ge=1,
        description="Number of times audio is read and reduced per second of audio",
    )

    function: SampleReducer = Field(
        default=rms_samples,
        description="Reduces one block of samples to a single magnitude",
    )


class ImageOptions(BaseModel):
    """Options for the image renderer.

    ``background_function`` and ``foreground_function`` override the plain
    colors. Without them the background is solid ``background_color`` and the
    foreground alternates ``foreground_color`` with ``alternate_color`` (solid
    when no alternate is set).

    Example:
        >>> opts = ImageOptions(foreground_color="#ff0000", scale_x=5, scale_y=2)
        >>> opts.foreground_color
        (255, 0, 0, 255)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    background_color: RGBA = Field(default=WHITE, description="Background color")
    foreground_color: RGBA = Field(default=BLACK, description="Waveform color")
    alternate_color: RGBA | None = Field(
        default=None, description="Optional color alternated with the foreground per magnitude"
    )

    background_function: ColorFunc | None = Field(
        default=None, description="Color policy for the background layer"
    )
    foreground_function: ColorFunc | None = Field(
        default=None, description="Color policy for the waveform layer"
    )

    scale_x: int = Field(default=1, ge=1, description="Horizontal scaling factor")
    scale_y: int = Field(default=1, ge=1, description="Vertical scaling factor")

    sharpness: int = Field(
        default=1,
        ge=0,
        description="Curvature applied to X-scaled images; 0 gives flat blocks",
    )

    scale_clipping: bool = Field(
        default=False,
        description="Scale the waveform down on its Y-axis when clipping thresholds are reached",
    )

    @field_validator("background_color", "foreground_color", mode="before")
    @classmethod
    def _parse_required_color(cls, value: object, info: ValidationInfo) -> RGBA:
        return parse_color(value, info.field_name)  # type: ignore[arg-type]

    @field_validator("alternate_color", mode="before")
    @classmethod
    def _parse_optional_color(cls, value: object) -> RGBA | None:
        if value is None:
            return None
        return parse_color(value, "alternate_color")  # type: ignore[arg-type]

    def background_policy(self) -> ColorFunc:
        """Color policy used to fill the background."""
        return self.background_function or SolidColor(self.background_color)

    def foreground_policy(self) -> ColorFunc:
        """Color policy used to draw the waveform."""
        return self.foreground_function or AlternateColor(self.foreground_color, self.alternate_color)


class ColorConfig(BaseModel):
    """Serializable color settings."""

    model_config = ConfigDict(extra="forbid")

    background: str = Field(default="#FFFFFF", description="Background color")
    foreground: str = Field(default="#000000", description="Waveform color")
    alternate: str | None = Field(default=None, description="Alternate waveform color")
    function: str = Field(default="solid", description="Waveform color function name")
    checker_size: int = Field(default=DEFAULT_CHECKER_SIZE, ge=1, description="Checker tile size")

    @field_validator("background", "foreground", "alternate")
    @classmethod
    def _validate_color(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is not None:
            parse_color(value, info.field_name)
        return value

    @field_validator("function")
    @classmethod
    def _validate_function(cls, value: str) -> str:
        if value not in COLOR_FUNCTIONS:
            raise ValueError(f"Unknown color function {value!r} (options: {', '.join(COLOR_FUNCTIONS)})")
        return value


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    structured: bool = Field(default=False, description="Emit JSON lines instead of text")
    filename: str | None = Field(default=None, description="Log file path (stderr when unset)")


class WaveformConfig(BaseModel):
    """File-backed waveform configuration.

    Example (YAML):
        resolution: 4
        scale_x: 5
        scale_clipping: true
        colors:
          foreground: "#3366ff"
          function: gradient
          alternate: "#ff3366"
    """

    model_config = ConfigDict(extra="forbid")

    resolution: int = Field(default=1, ge=1, description="Reductions per second of audio")
    scale_x: int = Field(default=1, ge=1, description="Horizontal scaling factor")
    scale_y: int = Field(default=1, ge=1, description="Vertical scaling factor")
    sharpness: int = Field(default=1, ge=0, description="Curvature for X-scaled images")
    scale_clipping: bool = Field(default=False, description="Enable clipping compensation")

    reducer: str = Field(default="rms", description="Sample reducer name")
    decoder: str = Field(
        default="soundfile", pattern="^(soundfile|librosa)$", description="Decoder backend"
    )

    colors: ColorConfig = Field(default_factory=ColorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("reducer")
    @classmethod
    def _validate_reducer(cls, value: str) -> str:
        if value not in REDUCERS:
            raise ValueError(f"Unknown sample reducer {value!r} (options: {', '.join(sorted(REDUCERS))})")
        return value

    def to_compute_options(self) -> ComputeOptions:
        """Runtime options for the reduction stage."""
        return ComputeOptions(resolution=self.resolution, function=get_reducer(self.reducer))

    def to_image_options(self, rng: random.Random | None = None) -> ImageOptions:
        """Runtime options for the renderer.

        Args:
            rng: Random source for the fuzz color function
        """
        colors = self.colors
        foreground_function = build_color_function(
            colors.function,
            colors.foreground,
            colors.alternate,
            checker_size=colors.checker_size,
            rng=rng,
        )

        return ImageOptions(
            background_color=colors.background,
            foreground_color=colors.foreground,
            alternate_color=colors.alternate,
            foreground_function=foreground_function,
            scale_x=self.scale_x,
            scale_y=self.scale_y,
            sharpness=self.sharpness,
            scale_clipping=self.scale_clipping,
        )


__all__ = [
    "ColorConfig",
    "ComputeOptions",
    "ImageOptions",
    "LoggingConfig",
    "WaveformConfig",
]
