"""
Tests for period-over-period comparison.
"""

from datetime import date, datetime

import pytest

from lift_analytics.core.comparison import (
    NEW_ACTIVITY_PERCENTAGE,
    compare,
    compare_periods,
    percentage_change,
    period_metrics,
)
from lift_analytics.core.models import DateRange, ExerciseEntry, Workout, WorkoutSet

TODAY = date(2024, 3, 13)


def _workout(when: datetime, volume_sets: list[tuple[float, int]], status: str = "completed") -> Workout:
    sets = tuple(WorkoutSet(weight=w, reps=r) for w, r in volume_sets)
    return Workout(
        id=f"w-{when.isoformat()}",
        user_id="u1",
        status=status,
        started_at=when,
        completed_at=when if status == "completed" else None,
        exercises=(ExerciseEntry("bench", "Bench", sets),),
    )


class TestPercentageChange:
    """Relative change with the zero-baseline sentinel."""

    def test_growth(self):
        assert percentage_change(1500, 1000) == 50

    def test_decline_rounds_half_up(self):
        # -66.67 -> -67
        assert percentage_change(1, 3) == -67

    def test_from_zero_is_sentinel(self):
        assert percentage_change(500, 0) == NEW_ACTIVITY_PERCENTAGE == 100

    def test_both_zero(self):
        assert percentage_change(0, 0) == 0

    def test_decimals(self):
        assert percentage_change(1, 3, ndigits=1) == pytest.approx(-66.7)


class TestCompare:
    """Metrics and deltas for two windows."""

    def test_basic(self):
        current = [_workout(datetime(2024, 3, 10), [(100, 10), (100, 5)])]  # 1500
        previous = [
            _workout(datetime(2024, 3, 1), [(100, 5)]),  # 500
            _workout(datetime(2024, 3, 2), [(100, 5)]),  # 500
        ]
        result = compare(current, previous)
        assert result.current_period.volume == 1500
        assert result.previous_period.avg_volume == 500
        assert result.change.volume_percentage == 50
        assert result.change.workouts == -1
        # avg 1500 vs 500 -> +200 %
        assert result.change.avg_volume_percentage == 200

    def test_empty_previous_window(self):
        current = [_workout(datetime(2024, 3, 10), [(100, 5)])]
        result = compare(current, [])
        assert result.change.volume_percentage == 100
        assert result.change.avg_volume_percentage == 100
        assert result.change.workouts == 1
        assert isinstance(result.change.volume_percentage, int)

    def test_both_empty(self):
        result = compare([], [])
        assert result.current_period.avg_volume == 0
        assert result.change.volume_percentage == 0
        assert result.change.workouts == 0

    def test_unfinished_workouts_excluded(self):
        metrics = period_metrics(
            [
                _workout(datetime(2024, 3, 10), [(100, 5)]),
                _workout(datetime(2024, 3, 11), [(100, 5)], status="cancelled"),
            ]
        )
        assert metrics.workouts == 1
        assert metrics.volume == 500


class TestComparePeriods:
    """Splitting a full history into adjacent windows."""

    def _history(self) -> list[Workout]:
        return [
            _workout(datetime(2024, 2, 28, 10), [(100, 10)]),  # before both windows
            _workout(datetime(2024, 3, 1, 10), [(100, 5)]),  # previous
            _workout(datetime(2024, 3, 8, 10), [(100, 5)]),  # current
            _workout(datetime(2024, 3, 12, 10), [(100, 10)]),  # current
        ]

    def test_rolling_preset(self):
        current_range, prev_range, result = compare_periods(
            self._history(), "last_7_days", today=TODAY
        )
        assert current_range == DateRange(date(2024, 3, 7), TODAY)
        assert prev_range == DateRange(date(2024, 2, 29), date(2024, 3, 6))
        assert result.current_period.workouts == 2
        assert result.previous_period.workouts == 1
        # 1500 vs 500
        assert result.change.volume_percentage == 200

    def test_explicit_range(self):
        period = DateRange(date(2024, 3, 7), date(2024, 3, 13))
        _, prev_range, result = compare_periods(self._history(), period)
        assert prev_range == DateRange(date(2024, 2, 29), date(2024, 3, 6))
        assert result.current_period.volume == 1500

    def test_unknown_period(self):
        with pytest.raises(ValueError):
            compare_periods(self._history(), "forever", today=TODAY)
