"""Tests for math_utils - rounding and clamping of untrusted numbers."""

from __future__ import annotations

import math

import pytest

from custom_components.housework_queue.utils.math_utils import (
    clamp,
    clamp_int,
    round_half_up,
)


class TestRoundHalfUp:
    """Halves always round up, unlike built-in round()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(19.5, 20), (20.5, 21), (20.49, 20), (0.5, 1), (7.0, 7)],
    )
    def test_rounding(self, value, expected) -> None:
        """Values round to the nearest integer, .5 going up."""
        assert round_half_up(value) == expected


class TestClamp:
    """Clamp a value between bounds."""

    def test_bounds(self) -> None:
        """Values outside the range snap to the nearest bound."""
        assert clamp(150, 0, 100) == 100
        assert clamp(-10, 0, 100) == 0
        assert clamp(50, 0, 100) == 50


class TestClampInt:
    """Coercion of arbitrary input to a bounded integer."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("7", 7),
            (" 20 ", 20),
            (7.5, 8),
            (0, 1),
            (-5, 1),
            (999, 240),
            ("abc", 1),
            ("", 1),
            (None, 1),
            (math.nan, 1),
            (math.inf, 1),
            (True, 1),
        ],
    )
    def test_clamp_int(self, raw, expected) -> None:
        """Non-finite or non-numeric input becomes the minimum."""
        assert clamp_int(raw, 1, 240) == expected
