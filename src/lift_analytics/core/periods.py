"""
Named analytics periods and their date ranges.

Rolling presets include today: "last_7_days" is today-6 .. today.
Calendar presets follow Monday-based weeks and calendar months/years.
"""

from datetime import date, timedelta, tzinfo
from typing import Iterable

from .config import ALL_TIME_PERIOD, CALENDAR_PERIODS, ROLLING_PERIOD_DAYS
from .dates import (
    monday_on_or_before,
    start_of_month,
    today_local,
    workout_date,
)
from .models import DateRange, Workout

PERIOD_NAMES: tuple[str, ...] = (
    *ROLLING_PERIOD_DAYS,
    *CALENDAR_PERIODS,
    ALL_TIME_PERIOD,
)


def _check_preset(preset: str) -> None:
    if preset not in PERIOD_NAMES:
        valid = ", ".join(PERIOD_NAMES)
        raise ValueError(f"Unknown period '{preset}'. Valid periods: {valid}")


def _previous_month(day: date) -> DateRange:
    last = start_of_month(day) - timedelta(days=1)
    return DateRange(start_of_month(last), last)


def resolve_period(
    preset: str,
    today: date | None = None,
    first_workout_day: date | None = None,
) -> DateRange:
    """
    Turn a preset name into an inclusive DateRange.

    Args:
        preset: One of PERIOD_NAMES
        today: Reference day (defaults to local today)
        first_workout_day: Start of "all_time"; today when None

    Returns:
        DateRange

    Raises:
        ValueError: If preset is unknown
    """
    _check_preset(preset)
    if today is None:
        today = today_local()

    if preset in ROLLING_PERIOD_DAYS:
        days = ROLLING_PERIOD_DAYS[preset]
        return DateRange(today - timedelta(days=days - 1), today)

    if preset == "this_week":
        return DateRange(monday_on_or_before(today), today)
    if preset == "last_week":
        start = monday_on_or_before(today) - timedelta(days=7)
        return DateRange(start, start + timedelta(days=6))
    if preset == "this_month":
        return DateRange(start_of_month(today), today)
    if preset == "last_month":
        return _previous_month(today)
    if preset == "this_year":
        return DateRange(date(today.year, 1, 1), today)
    if preset == "last_year":
        return DateRange(date(today.year - 1, 1, 1), date(today.year - 1, 12, 31))

    # all_time
    start = first_workout_day if first_workout_day is not None else today
    return DateRange(min(start, today), today)


def previous_range(
    period: str | DateRange,
    today: date | None = None,
    first_workout_day: date | None = None,
) -> DateRange:
    """
    Comparison window immediately preceding a period.

    Rolling presets and explicit ranges compare against the previous
    window of equal length; calendar presets against the previous
    calendar week/month/year.
    """
    if isinstance(period, str):
        _check_preset(period)
        if today is None:
            today = today_local()
        current = resolve_period(period, today, first_workout_day)
        if period in ("this_week", "last_week"):
            start = current.start - timedelta(days=7)
            return DateRange(start, start + timedelta(days=6))
        if period in ("this_month", "last_month"):
            return _previous_month(current.start)
        if period in ("this_year", "last_year"):
            year = current.start.year - 1
            return DateRange(date(year, 1, 1), date(year, 12, 31))
    else:
        current = period

    end = current.start - timedelta(days=1)
    return DateRange(end - timedelta(days=current.days - 1), end)


def earliest_workout_day(
    workouts: Iterable[Workout],
    tz: tzinfo | None = None,
) -> date | None:
    """Local date of the earliest completed workout, or None."""
    days = [workout_date(w, tz) for w in workouts if w.is_completed]
    return min(days) if days else None


def filter_by_range(
    workouts: Iterable[Workout],
    date_range: DateRange,
    tz: tzinfo | None = None,
) -> list[Workout]:
    """Completed workouts whose local date falls inside date_range."""
    return [
        w for w in workouts
        if w.is_completed and date_range.contains(workout_date(w, tz))
    ]
