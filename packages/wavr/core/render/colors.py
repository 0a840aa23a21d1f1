"""Color policies for waveform drawing.

A color policy is called once per drawn pixel with the drawing context
``(n, x, y, max_n, max_x, max_y)``: the index of the magnitude being drawn, the
pixel coordinate, and the maximum of each. It returns the RGBA color for that
pixel.

Policies that need history (stripes, gradients) key it on ``n`` because one
magnitude is drawn over many pixels. The renderer calls ``reset()`` before each
render so repeated renders produce identical images.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
import random

from PIL import ImageColor

from wavr.core.errors import OptionsError
from wavr.core.utils.math import clamp, lerp

RGBA = tuple[int, int, int, int]
ColorLike = str | Sequence[int]
ColorFunc = Callable[[int, int, int, int, int, int], RGBA]

BLACK: RGBA = (0, 0, 0, 255)
WHITE: RGBA = (255, 255, 255, 255)

# Default tile edge, in pixels, for checkerboard policies
DEFAULT_CHECKER_SIZE = 10


def parse_color(value: ColorLike | None, option: str = "color") -> RGBA:
    """Convert a color string or tuple to an RGBA tuple.

    Accepts anything Pillow's ImageColor understands ("#fff", "#FF0000",
    "red", "rgb(0, 0, 255)") and 3- or 4-item integer sequences.

    Raises:
        OptionsError: If value is None or cannot be parsed
    """
    if value is None:
        raise OptionsError(option, f"{option} cannot be nil")

    if isinstance(value, str):
        try:
            return ImageColor.getcolor(value, "RGBA")  # type: ignore[return-value]
        except ValueError as e:
            raise OptionsError(option, f"invalid color {value!r}") from e

    components = tuple(int(c) for c in value)
    if len(components) == 3:
        components = (*components, 255)
    if len(components) != 4 or any(c < 0 or c > 255 for c in components):
        raise OptionsError(option, f"invalid color {value!r}")
    return components  # type: ignore[return-value]


def _palette(colors: Sequence[ColorLike | None], option: str) -> list[RGBA]:
    palette = [parse_color(c, option) for c in colors if c is not None]
    if not palette:
        raise OptionsError(option, "at least one color is required")
    return palette


class ColorPolicy(ABC):
    """Base class for color policies."""

    @abstractmethod
    def color_at(self, n: int, x: int, y: int, max_n: int, max_x: int, max_y: int) -> RGBA:
        """Color for pixel (x, y) while drawing magnitude n."""

    def reset(self) -> None:
        """Forget per-render state. Stateless policies have none."""

    def __call__(self, n: int, x: int, y: int, max_n: int, max_x: int, max_y: int) -> RGBA:
        return self.color_at(n, x, y, max_n, max_x, max_y)


class SolidColor(ColorPolicy):
    """Single color at every coordinate. Default for both layers."""

    def __init__(self, color: ColorLike) -> None:
        self.color = parse_color(color)

    def color_at(self, n: int, x: int, y: int, max_n: int, max_x: int, max_y: int) -> RGBA:
        return self.color


class StripeColor(ColorPolicy):
    """Rotates through a palette, one color per new magnitude.

    Each time ``n`` increases past the last value seen, the next palette color
    is used; the rotation wraps until the image is complete. ``None`` entries
    are ignored.

    The rotation follows the magnitudes that are drawn, not their indexes: a
    silent slice never calls the policy, so it does not use up a color. Values
    ``[0.1, 0.0, 0.1, 0.1]`` over ``(A, B, C)`` draw A, nothing, B, C.
    """

    def __init__(self, *colors: ColorLike | None) -> None:
        self.colors = _palette(colors, "colors")
        self.reset()

    def reset(self) -> None:
        self._last_n: int | None = None
        self._index = 0

    def color_at(self, n: int, x: int, y: int, max_n: int, max_x: int, max_y: int) -> RGBA:
        if self._last_n is None:
            self._last_n = n
        elif n > self._last_n:
            self._last_n = n
            self._index = (self._index + 1) % len(self.colors)

        return self.colors[self._index]


class AlternateColor(ColorPolicy):
    """Foreground color on even magnitudes, alternate color on odd ones."""

    def __init__(self, color: ColorLike, alternate: ColorLike | None = None) -> None:
        self.color = parse_color(color)
        self.alternate = parse_color(alternate, "alternate") if alternate is not None else self.color

    def color_at(self, n: int, x: int, y: int, max_n: int, max_x: int, max_y: int) -> RGBA:
        return self.color if n % 2 == 0 else self.alternate


class CheckerColor(ColorPolicy):
    """Checkerboard of two colors with square tiles of ``size`` pixels."""

    def __init__(self, color_a: ColorLike, color_b: ColorLike, size: int = DEFAULT_CHECKER_SIZE) -> None:
        if size < 1:
            raise OptionsError("size", "checker size must be at least 1")
        self.color_a = parse_color(color_a, "color_a")
        self.color_b = parse_color(color_b, "color_b")
        self.size = size

    def color_at(self, n: int, x: int, y: int, max_n: int, max_x: int, max_y: int) -> RGBA:
        if ((x // self.size) + (y // self.size)) % 2 == 0:
            return self.color_a
        return self.color_b


class FuzzColor(ColorPolicy):
    """Random palette color on every call, for a "static" effect.

    Args:
        *colors: Palette; ``None`` entries are ignored
        rng: Random source. Each policy owns its own; a fresh, OS-seeded
            ``random.Random`` is created when omitted. Not safe to share
            between threads.
    """

    def __init__(self, *colors: ColorLike | None, rng: random.Random | None = None) -> None:
        self.colors = _palette(colors, "colors")
        self._rng = rng or random.Random()

    def color_at(self, n: int, x: int, y: int, max_n: int, max_x: int, max_y: int) -> RGBA:
        return self.colors[self._rng.randrange(len(self.colors))]


class GradientColor(ColorPolicy):
    """Linear gradient from ``start`` to ``end`` across the magnitudes.

    The color is a function of ``n / max_n``. It is recomputed only when ``n``
    increases, so every pixel of one magnitude shares a color. ``n == 0`` is
    always exactly ``start`` and ``n == max_n`` exactly ``end``.
    """

    def __init__(self, start: ColorLike, end: ColorLike) -> None:
        self.start = parse_color(start, "start")
        self.end = parse_color(end, "end")
        self.reset()

    def reset(self) -> None:
        self._last_n = 0
        self._current = self.start

    def color_at(self, n: int, x: int, y: int, max_n: int, max_x: int, max_y: int) -> RGBA:
        if n <= 0:
            return self.start
        if n >= max_n:
            return self.end
        if n <= self._last_n:
            return self._current

        self._last_n = n
        self._current = self._interpolate(n / max_n)
        return self._current

    def _interpolate(self, t: float) -> RGBA:
        components = []
        for a, b in zip(self.start, self.end, strict=True):
            value = int(round(lerp(a, b, t)))
            components.append(clamp(value, min(a, b), max(a, b)))
        return tuple(components)  # type: ignore[return-value]


COLOR_FUNCTIONS = ("alternate", "checker", "fuzz", "gradient", "solid", "stripe")


def build_color_function(
    name: str,
    color: ColorLike,
    alternate: ColorLike | None = None,
    *,
    checker_size: int = DEFAULT_CHECKER_SIZE,
    rng: random.Random | None = None,
) -> ColorPolicy:
    """Build a foreground policy by name, as the CLI and config files do.

    When no alternate color is given, two-color policies fall back to ``color``
    for their second color.

    Raises:
        OptionsError: If name is not one of COLOR_FUNCTIONS
    """
    second = alternate if alternate is not None else color

    if name == "solid":
        return SolidColor(color)
    if name == "stripe":
        return StripeColor(color, second)
    if name == "alternate":
        return AlternateColor(color, alternate)
    if name == "fuzz":
        return FuzzColor(color, second, rng=rng)
    if name == "gradient":
        return GradientColor(color, second)
    if name == "checker":
        return CheckerColor(color, second, checker_size)

    raise OptionsError("function", f"unknown color function {name!r} (options: {', '.join(COLOR_FUNCTIONS)})")


__all__ = [
    "BLACK",
    "COLOR_FUNCTIONS",
    "RGBA",
    "WHITE",
    "AlternateColor",
    "CheckerColor",
    "ColorFunc",
    "ColorLike",
    "ColorPolicy",
    "FuzzColor",
    "GradientColor",
    "SolidColor",
    "StripeColor",
    "build_color_function",
    "parse_color",
]
