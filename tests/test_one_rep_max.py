"""
Unit tests for one-rep max estimation and best-set selection.

Expected values are hand-computed from the Epley formula:
    1RM = weight * (1 + reps / 30)
"""

import pytest

from lift_analytics.core.models import WorkoutSet
from lift_analytics.core.one_rep_max import best_set, estimate_one_rep_max, set_one_rep_max


def _set(weight: float, reps: int, rpe: float | None = None) -> WorkoutSet:
    return WorkoutSet(weight=weight, reps=reps, rpe=rpe)


class TestEstimateOneRepMax:
    """Epley estimate and its validity range."""

    def test_ten_reps(self):
        # 100 * (1 + 10/30) = 133.33
        assert estimate_one_rep_max(100, 10) == pytest.approx(133.333, abs=1e-3)

    def test_single_rep_is_slightly_above_weight(self):
        # 100 * (1 + 1/30) = 103.33
        assert estimate_one_rep_max(100, 1) == pytest.approx(103.333, abs=1e-3)

    def test_fifteen_reps_is_last_valid(self):
        assert estimate_one_rep_max(100, 15) == pytest.approx(150.0)

    def test_sixteen_reps_has_no_estimate(self):
        assert estimate_one_rep_max(100, 16) is None

    def test_twenty_reps_has_no_estimate(self):
        assert estimate_one_rep_max(50, 20) is None

    def test_zero_reps_has_no_estimate(self):
        assert estimate_one_rep_max(100, 0) is None

    def test_bodyweight_set_has_no_estimate(self):
        assert estimate_one_rep_max(0, 10) is None

    def test_monotonic_in_reps(self):
        estimates = [estimate_one_rep_max(80, r) for r in range(1, 16)]
        assert estimates == sorted(estimates)

    def test_set_one_rep_max_uses_set_fields(self):
        assert set_one_rep_max(_set(105, 10)) == pytest.approx(140.0)


class TestBestSet:
    """Selection of the set with the highest estimate."""

    def test_highest_estimate_wins(self):
        sets = [_set(100, 5), _set(90, 8), _set(80, 12)]
        # 116.67, 114.0, 112.0
        assert best_set(sets) is sets[0]

    def test_sets_without_estimate_are_skipped(self):
        sets = [_set(60, 20), _set(50, 10)]
        assert best_set(sets) is sets[1]

    def test_no_estimable_set_returns_none(self):
        assert best_set([_set(40, 25), _set(0, 10)]) is None

    def test_empty_returns_none(self):
        assert best_set([]) is None

    def test_full_tie_keeps_first(self):
        first = _set(100, 5, rpe=8)
        second = _set(100, 5, rpe=9)
        assert best_set([first, second]) is first
