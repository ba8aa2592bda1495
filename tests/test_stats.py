"""
Tests for the shared numeric helpers.
"""

import pytest

from lift_analytics.core.stats import (
    coefficient_of_variation,
    linear_regression,
    round_half_away,
    round_half_up,
)


class TestRounding:
    """Half-up and half-away-from-zero rounding."""

    def test_half_up_goes_towards_positive_infinity(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2

    def test_half_up_keeps_decimal_form(self):
        assert round_half_up(1.005, 2) == 1.01

    def test_half_away_is_symmetric(self):
        assert round_half_away(2.25, 1) == 2.3
        assert round_half_away(-2.25, 1) == -2.3
        assert round_half_away(-2.5) == -3

    def test_half_away_non_ties(self):
        assert round_half_away(-66.67) == -67
        assert round_half_away(66.64, 1) == 66.6

    def test_half_away_small_negative_is_plain_zero(self):
        result = round_half_away(-0.01, 1)
        assert result == 0
        assert str(result) == "0.0"


class TestSpread:
    """Coefficient of variation and least squares."""

    def test_constant_series_has_no_spread(self):
        assert coefficient_of_variation([5, 5, 5]) == 0

    def test_exact_line(self):
        a, b, _ = linear_regression([(0, 1.0), (1, 3.0), (2, 5.0)])
        assert a == pytest.approx(1.0)
        assert b == pytest.approx(2.0)
