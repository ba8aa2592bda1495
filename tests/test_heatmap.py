"""
Tests for the contribution heatmap.

Reference day is Wednesday 2024-03-13 unless stated otherwise.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from lift_analytics.core.heatmap import build_heatmap, cap_period, intensity_level
from lift_analytics.core.models import DateRange, ExerciseEntry, Workout, WorkoutSet

TODAY = date(2024, 3, 13)


def _workout(when: datetime, workout_id: str = "w", status: str = "completed") -> Workout:
    return Workout(
        id=workout_id,
        user_id="u1",
        status=status,
        started_at=when - timedelta(hours=1),
        completed_at=when if status == "completed" else None,
        exercises=(ExerciseEntry("bench", "Bench", (WorkoutSet(weight=100, reps=5),)),),
    )


def _week_workouts() -> list[Workout]:
    return [
        _workout(datetime(2024, 3, 5, 9), "tue-before"),  # in grid, outside period
        _workout(datetime(2024, 3, 11, 10), "mon-1"),
        _workout(datetime(2024, 3, 11, 18), "mon-2"),
        _workout(datetime(2024, 3, 12, 9), "tue"),
        _workout(datetime(2024, 3, 13, 9), "cancelled", status="cancelled"),
    ]


class TestIntensityLevel:
    """Discretization of daily counts."""

    @pytest.mark.parametrize("count, level", [(0, 0), (1, 1), (2, 2), (3, 3), (10, 3)])
    def test_default_thresholds(self, count, level):
        assert intensity_level(count) == level

    def test_custom_thresholds(self):
        assert intensity_level(4, (1, 3, 5, 7)) == 2


class TestCapPeriod:
    """Capping long periods to the most recent year."""

    def test_short_period_untouched(self):
        period = DateRange(date(2024, 1, 1), TODAY)
        assert cap_period(period) == (period, False)

    def test_long_period_capped(self):
        capped, was_capped = cap_period(DateRange(date(2023, 1, 1), TODAY))
        assert was_capped
        assert capped.end == TODAY
        assert capped.days == 365
        assert capped.start == date(2023, 3, 15)


class TestBuildHeatmap:
    """Grid layout and summary statistics."""

    def test_grid_is_monday_aligned_and_rectangular(self):
        heatmap = build_heatmap(_week_workouts(), "last_7_days", today=TODAY)
        # last_7_days = Thu 03-07 .. Wed 03-13 -> grid Mon 03-04 .. Sun 03-17
        assert heatmap.period == DateRange(date(2024, 3, 7), TODAY)
        assert heatmap.total_weeks == 2
        assert all(len(week) == 7 for week in heatmap.cells)
        assert heatmap.cells[0][0].date == date(2024, 3, 4)
        assert heatmap.cells[-1][-1].date == date(2024, 3, 17)

    def test_padding_cells_marked_outside_period(self):
        heatmap = build_heatmap(_week_workouts(), "last_7_days", today=TODAY)
        first_week = heatmap.cells[0]
        assert [c.is_in_period for c in first_week] == [False, False, False, True, True, True, True]
        # Padding still shows its count
        assert first_week[1].count == 1

    def test_counts_and_levels(self):
        heatmap = build_heatmap(_week_workouts(), "last_7_days", today=TODAY)
        monday, tuesday, wednesday = heatmap.cells[1][:3]
        assert (monday.count, monday.intensity_level) == (2, 2)
        assert (tuesday.count, tuesday.intensity_level) == (1, 1)
        assert (wednesday.count, wednesday.intensity_level) == (0, 0)
        assert wednesday.is_today

    def test_summary(self):
        heatmap = build_heatmap(_week_workouts(), "last_7_days", today=TODAY)
        assert heatmap.total_workouts == 3
        assert heatmap.average_workouts_per_week == pytest.approx(1.5)
        assert heatmap.most_active_day == "Monday"
        assert heatmap.legend_levels == [0, 1, 2, 3]
        assert not heatmap.is_capped_to_year
        assert not heatmap.is_empty

    def test_streaks(self):
        heatmap = build_heatmap(_week_workouts(), "last_7_days", today=TODAY)
        # 03-11 and 03-12; today has no workout yet so yesterday keeps it alive
        assert heatmap.current_streak == 2
        assert heatmap.longest_streak == 2

    def test_most_active_day_tie_picks_earliest_weekday(self):
        workouts = [
            _workout(datetime(2024, 3, 12, 9), "tue"),
            _workout(datetime(2024, 3, 11, 9), "mon"),
        ]
        heatmap = build_heatmap(workouts, "this_week", today=TODAY)
        assert heatmap.most_active_day == "Monday"

    def test_empty_history(self):
        heatmap = build_heatmap([], "last_30_days", today=TODAY)
        assert heatmap.is_empty
        assert heatmap.most_active_day is None
        assert heatmap.current_streak == 0
        assert heatmap.longest_streak == 0
        assert heatmap.average_workouts_per_week == 0.0
        assert all(len(week) == 7 for week in heatmap.cells)

    def test_long_period_is_capped(self):
        workouts = [_workout(datetime(2023, 1, 2 + i, 10), f"old{i}") for i in range(5)]
        workouts.append(_workout(datetime(2024, 3, 12, 10), "recent"))
        heatmap = build_heatmap(workouts, DateRange(date(2023, 1, 1), TODAY), today=TODAY)
        assert heatmap.is_capped_to_year
        assert heatmap.period.days == 365
        assert heatmap.total_workouts == 1
        # Best streak covers the requested period, before capping
        assert heatmap.longest_streak == 5
        assert heatmap.total_weeks * 7 == sum(len(week) for week in heatmap.cells)

    def test_all_time_starts_at_first_workout(self):
        heatmap = build_heatmap(_week_workouts(), "all_time", today=TODAY)
        assert heatmap.period == DateRange(date(2024, 3, 5), TODAY)
        assert heatmap.total_workouts == 4

    def test_late_evening_workout_uses_local_day(self):
        eastern = timezone(timedelta(hours=-5))
        # 23:50 local on 03-12 is already 03-13 in UTC
        late = datetime(2024, 3, 12, 23, 50, tzinfo=eastern).astimezone(timezone.utc)
        heatmap = build_heatmap([_workout(late)], "last_7_days", today=TODAY, tz=eastern)
        tuesday = heatmap.cells[1][1]
        assert tuesday.date == date(2024, 3, 12)
        assert tuesday.count == 1
        assert heatmap.cells[1][2].count == 0

    def test_month_labels(self):
        heatmap = build_heatmap([], DateRange(date(2024, 2, 20), TODAY), today=TODAY)
        # grid starts Mon 02-19; March 1st falls in the second column
        assert heatmap.month_labels == [(2024, 2, 0), (2024, 3, 1)]

    def test_custom_thresholds(self):
        workouts = [_workout(datetime(2024, 3, 12, h), f"w{h}") for h in range(8, 13)]
        heatmap = build_heatmap(
            workouts, "last_7_days", today=TODAY, level_thresholds=(1, 2, 3, 4, 5)
        )
        assert heatmap.cells[1][1].intensity_level == 5
        assert heatmap.legend_levels == [0, 1, 2, 3, 4, 5]

    def test_invalid_thresholds(self):
        with pytest.raises(ValueError):
            build_heatmap([], "last_7_days", today=TODAY, level_thresholds=(2, 1))

    def test_unknown_period(self):
        with pytest.raises(ValueError, match="Unknown period"):
            build_heatmap([], "fortnight", today=TODAY)
