"""Tests for color policies."""

from __future__ import annotations

import random

import pytest

from wavr.core.errors import OptionsError
from wavr.core.render.colors import (
    BLACK,
    COLOR_FUNCTIONS,
    WHITE,
    AlternateColor,
    CheckerColor,
    FuzzColor,
    GradientColor,
    SolidColor,
    StripeColor,
    build_color_function,
    parse_color,
)


def _draw(policy, n: int, max_n: int = 9, x: int = 0, y: int = 0):
    return policy(n, x, y, max_n, 99, 127)


class TestParseColor:
    """Test suite for parse_color."""

    def test_hex_strings(self):
        assert parse_color("#FF0000") == (255, 0, 0, 255)
        assert parse_color("#0f0") == (0, 255, 0, 255)
        assert parse_color("#0000ff80") == (0, 0, 255, 128)

    def test_named_color(self):
        assert parse_color("white") == WHITE

    def test_tuples(self):
        assert parse_color((1, 2, 3)) == (1, 2, 3, 255)
        assert parse_color([1, 2, 3, 4]) == (1, 2, 3, 4)

    def test_none(self):
        with pytest.raises(OptionsError, match="foreground: foreground cannot be nil"):
            parse_color(None, "foreground")

    def test_invalid(self):
        with pytest.raises(OptionsError):
            parse_color("not-a-color")
        with pytest.raises(OptionsError):
            parse_color((300, 0, 0))
        with pytest.raises(OptionsError):
            parse_color((1, 2))


class TestSolidColor:
    """Test suite for SolidColor."""

    def test_same_color_everywhere(self, red):
        policy = SolidColor(red)
        assert {_draw(policy, n, x=n * 3, y=n * 7) for n in range(10)} == {red}


class TestStripeColor:
    """Test suite for StripeColor."""

    def test_rotates_per_new_index(self, red, green, blue):
        policy = StripeColor(red, green, blue)
        colors = [_draw(policy, n) for n in range(7)]

        assert colors == [red, green, blue, red, green, blue, red]

    def test_same_index_keeps_color(self, red, green):
        """Every pixel of one magnitude shares its stripe."""
        policy = StripeColor(red, green)
        first = [_draw(policy, 0, y=y) for y in range(5)]
        second = [_draw(policy, 1, y=y) for y in range(5)]

        assert set(first) == {red}
        assert set(second) == {green}

    def test_reset_restarts_rotation(self, red, green):
        policy = StripeColor(red, green)
        _draw(policy, 0)
        _draw(policy, 1)
        policy.reset()

        assert _draw(policy, 0) == red

    def test_ignores_none(self, red):
        policy = StripeColor(None, red, None)
        assert policy.colors == [red]

    def test_empty_palette(self):
        with pytest.raises(OptionsError, match="colors"):
            StripeColor()
        with pytest.raises(OptionsError):
            StripeColor(None)


class TestAlternateColor:
    """Test suite for AlternateColor."""

    def test_alternates_by_parity(self, red, blue):
        policy = AlternateColor(red, blue)
        assert [_draw(policy, n) for n in range(4)] == [red, blue, red, blue]

    def test_without_alternate_is_solid(self, red):
        policy = AlternateColor(red)
        assert {_draw(policy, n) for n in range(4)} == {red}


class TestCheckerColor:
    """Test suite for CheckerColor."""

    def test_tiles(self):
        policy = CheckerColor(BLACK, WHITE, size=2)

        assert _draw(policy, 0, x=0, y=0) == BLACK
        assert _draw(policy, 0, x=1, y=1) == BLACK
        assert _draw(policy, 0, x=2, y=0) == WHITE
        assert _draw(policy, 0, x=0, y=2) == WHITE
        assert _draw(policy, 0, x=2, y=2) == BLACK

    def test_periodic(self):
        policy = CheckerColor(BLACK, WHITE, size=3)

        for x in range(7):
            for y in range(7):
                color = _draw(policy, 0, x=x, y=y)
                assert _draw(policy, 0, x=x + 3, y=y) != color
                assert _draw(policy, 0, x=x + 6, y=y) == color
                assert _draw(policy, 0, x=x, y=y + 6) == color

    def test_invalid_size(self):
        with pytest.raises(OptionsError, match="size"):
            CheckerColor(BLACK, WHITE, size=0)


class TestFuzzColor:
    """Test suite for FuzzColor."""

    def test_only_palette_colors(self, red, green, blue):
        palette = {red, green, blue}
        policy = FuzzColor(red, green, blue)

        for i in range(10000):
            assert _draw(policy, i % 10, x=i % 100) in palette

    def test_seeded_rng_is_reproducible(self, red, green, blue):
        a = FuzzColor(red, green, blue, rng=random.Random(42))
        b = FuzzColor(red, green, blue, rng=random.Random(42))

        assert [_draw(a, 0) for _ in range(50)] == [_draw(b, 0) for _ in range(50)]

    def test_empty_palette(self):
        with pytest.raises(OptionsError):
            FuzzColor(None, None)


class TestGradientColor:
    """Test suite for GradientColor."""

    def test_endpoints(self):
        policy = GradientColor(BLACK, WHITE)

        assert _draw(policy, 0, max_n=10) == BLACK
        assert _draw(policy, 10, max_n=10) == WHITE

    def test_midpoint(self):
        policy = GradientColor((0, 0, 0, 255), (200, 100, 50, 255))
        _draw(policy, 0, max_n=10)

        assert _draw(policy, 5, max_n=10) == (100, 50, 25, 255)

    def test_monotonic(self):
        policy = GradientColor(BLACK, WHITE)
        reds = [_draw(policy, n, max_n=20)[0] for n in range(21)]

        assert reds == sorted(reds)
        assert all(0 <= r <= 255 for r in reds)

    def test_descending_channels_stay_in_range(self):
        policy = GradientColor(WHITE, BLACK)
        reds = [_draw(policy, n, max_n=7)[0] for n in range(8)]

        assert reds == sorted(reds, reverse=True)
        assert reds[0] == 255
        assert reds[-1] == 0

    def test_single_value(self):
        """max_n of zero never divides by zero."""
        policy = GradientColor(BLACK, WHITE)
        assert _draw(policy, 0, max_n=0) == BLACK


class TestBuildColorFunction:
    """Test suite for build_color_function."""

    @pytest.mark.parametrize(
        "name,cls",
        [
            ("solid", SolidColor),
            ("stripe", StripeColor),
            ("alternate", AlternateColor),
            ("fuzz", FuzzColor),
            ("gradient", GradientColor),
            ("checker", CheckerColor),
        ],
    )
    def test_builds_by_name(self, name, cls):
        assert isinstance(build_color_function(name, "#000", "#fff"), cls)

    def test_all_names_covered(self):
        for name in COLOR_FUNCTIONS:
            build_color_function(name, "#000")

    def test_second_color_falls_back(self, red):
        policy = build_color_function("stripe", red)
        assert policy.colors == [red, red]

    def test_checker_size(self):
        policy = build_color_function("checker", "#000", "#fff", checker_size=4)
        assert policy.size == 4

    def test_unknown(self):
        with pytest.raises(OptionsError, match="function"):
            build_color_function("rainbow", "#000")
