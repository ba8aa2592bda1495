"""
Tests for period presets, previous windows and streaks.

Reference day is Wednesday 2024-03-13 (2024 is a leap year).
"""

from datetime import date, datetime

import pytest

from lift_analytics.core.models import DateRange, Workout
from lift_analytics.core.periods import (
    PERIOD_NAMES,
    earliest_workout_day,
    filter_by_range,
    previous_range,
    resolve_period,
)
from lift_analytics.core.streaks import (
    current_streak,
    current_streak_from_days,
    daily_workout_counts,
    has_active_streak,
    longest_streak,
    longest_streak_from_days,
)

TODAY = date(2024, 3, 13)


def _workout(day: date, status: str = "completed", hour: int = 10) -> Workout:
    when = datetime(day.year, day.month, day.day, hour)
    return Workout(
        id=f"w-{day.isoformat()}-{hour}",
        user_id="u1",
        status=status,
        started_at=when,
        completed_at=when if status == "completed" else None,
    )


class TestResolvePeriod:
    """Preset name -> inclusive date range."""

    @pytest.mark.parametrize(
        "preset, start, end",
        [
            ("last_7_days", date(2024, 3, 7), TODAY),
            ("last_14_days", date(2024, 2, 29), TODAY),
            ("last_30_days", date(2024, 2, 13), TODAY),
            ("last_90_days", date(2023, 12, 15), TODAY),
            ("this_week", date(2024, 3, 11), TODAY),
            ("last_week", date(2024, 3, 4), date(2024, 3, 10)),
            ("this_month", date(2024, 3, 1), TODAY),
            ("last_month", date(2024, 2, 1), date(2024, 2, 29)),
            ("this_year", date(2024, 1, 1), TODAY),
            ("last_year", date(2023, 1, 1), date(2023, 12, 31)),
        ],
    )
    def test_presets(self, preset, start, end):
        assert resolve_period(preset, TODAY) == DateRange(start, end)

    def test_all_time_uses_first_workout(self):
        assert resolve_period("all_time", TODAY, date(2023, 6, 1)) == DateRange(
            date(2023, 6, 1), TODAY
        )

    def test_all_time_without_history(self):
        assert resolve_period("all_time", TODAY) == DateRange(TODAY, TODAY)

    def test_last_month_in_january(self):
        assert resolve_period("last_month", date(2024, 1, 15)) == DateRange(
            date(2023, 12, 1), date(2023, 12, 31)
        )

    def test_unknown_preset_lists_valid_names(self):
        with pytest.raises(ValueError, match="last_7_days"):
            resolve_period("yesterday", TODAY)

    def test_every_name_resolves(self):
        for name in PERIOD_NAMES:
            assert resolve_period(name, TODAY).end <= TODAY


class TestPreviousRange:
    """The comparison window before a period."""

    def test_rolling(self):
        assert previous_range("last_7_days", TODAY) == DateRange(
            date(2024, 2, 29), date(2024, 3, 6)
        )

    def test_this_week(self):
        assert previous_range("this_week", TODAY) == DateRange(
            date(2024, 3, 4), date(2024, 3, 10)
        )

    def test_this_month_is_full_previous_month(self):
        assert previous_range("this_month", TODAY) == DateRange(
            date(2024, 2, 1), date(2024, 2, 29)
        )

    def test_last_month(self):
        assert previous_range("last_month", TODAY) == DateRange(
            date(2024, 1, 1), date(2024, 1, 31)
        )

    def test_this_year(self):
        assert previous_range("this_year", TODAY) == DateRange(
            date(2023, 1, 1), date(2023, 12, 31)
        )

    def test_explicit_range_equal_length(self):
        assert previous_range(DateRange(date(2024, 3, 1), date(2024, 3, 10))) == DateRange(
            date(2024, 2, 20), date(2024, 2, 29)
        )


class TestFiltering:
    """Range filtering of workouts."""

    def test_filter_by_range(self):
        workouts = [
            _workout(date(2024, 3, 6)),
            _workout(date(2024, 3, 7)),
            _workout(date(2024, 3, 13)),
            _workout(date(2024, 3, 10), status="cancelled"),
        ]
        kept = filter_by_range(workouts, DateRange(date(2024, 3, 7), TODAY))
        assert [w.completed_at.day for w in kept] == [7, 13]

    def test_earliest_workout_day(self):
        workouts = [
            _workout(date(2024, 3, 6)),
            _workout(date(2024, 1, 2), status="active"),
            _workout(date(2024, 2, 10)),
        ]
        assert earliest_workout_day(workouts) == date(2024, 2, 10)

    def test_earliest_workout_day_empty(self):
        assert earliest_workout_day([]) is None


class TestStreaks:
    """Consecutive-day streaks."""

    def test_longest_from_days(self):
        days = [date(2024, 3, d) for d in (1, 2, 3, 5, 6)]
        assert longest_streak_from_days(days) == 3

    def test_longest_ignores_duplicates_and_order(self):
        days = [date(2024, 3, 2), date(2024, 3, 1), date(2024, 3, 2)]
        assert longest_streak_from_days(days) == 2

    def test_longest_empty(self):
        assert longest_streak_from_days([]) == 0

    def test_longest_across_month_boundary(self):
        workouts = [_workout(date(2024, 2, 28)), _workout(date(2024, 2, 29)), _workout(date(2024, 3, 1))]
        assert longest_streak(workouts) == 3

    def test_longest_within_range(self):
        workouts = [_workout(date(2024, 3, d)) for d in (1, 2, 3, 4)]
        assert longest_streak(workouts, date_range=DateRange(date(2024, 3, 3), TODAY)) == 2

    def test_current_includes_today(self):
        days = [date(2024, 3, 11), date(2024, 3, 12), TODAY]
        assert current_streak_from_days(days, TODAY) == 3

    def test_current_alive_from_yesterday(self):
        days = [date(2024, 3, 11), date(2024, 3, 12)]
        assert current_streak_from_days(days, TODAY) == 2

    def test_current_broken(self):
        days = [date(2024, 3, 10), date(2024, 3, 11)]
        assert current_streak_from_days(days, TODAY) == 0

    def test_current_from_workouts(self):
        workouts = [_workout(date(2024, 3, 12)), _workout(date(2024, 3, 12), hour=18)]
        assert current_streak(workouts, TODAY) == 1
        assert has_active_streak(workouts, TODAY)

    def test_cancelled_workouts_do_not_count(self):
        workouts = [_workout(TODAY, status="cancelled")]
        assert daily_workout_counts(workouts) == {}
        assert not has_active_streak(workouts, TODAY)
