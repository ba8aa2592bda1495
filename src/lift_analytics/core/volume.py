"""
Descriptive totals for one period: daily volume, rest days, best workout.

Only completed workouts count; days are local calendar days.

    volume_by_day = one DailyVolume per day of the period, zero-filled
    rest_days     = period days - distinct days with a completed workout
    best_workout  = highest total_volume (earliest on ties)
"""

from datetime import date, tzinfo
from typing import Iterable

from .dates import workout_date, workout_instant
from .models import DailyVolume, DateRange, PeriodSummary, Workout
from .periods import filter_by_range


def volume_by_day(
    workouts: Iterable[Workout],
    date_range: DateRange,
    tz: tzinfo | None = None,
) -> list[DailyVolume]:
    """
    Zero-filled daily volume series for a period.

    Args:
        workouts: Workout snapshot (any status)
        date_range: Days to cover
        tz: Timezone for local dates

    Returns:
        One DailyVolume per day of date_range, oldest first
    """
    volume: dict[date, float] = {}
    count: dict[date, int] = {}
    for w in filter_by_range(workouts, date_range, tz):
        day = workout_date(w, tz)
        volume[day] = volume.get(day, 0.0) + w.total_volume
        count[day] = count.get(day, 0) + 1

    return [
        DailyVolume(date=day, volume=volume.get(day, 0.0), workouts=count.get(day, 0))
        for day in date_range.iter_days()
    ]


def total_sets(workouts: Iterable[Workout]) -> int:
    """Number of sets across completed workouts."""
    return sum(w.set_count for w in workouts if w.is_completed)


def rest_days(
    workouts: Iterable[Workout],
    date_range: DateRange,
    tz: tzinfo | None = None,
) -> int:
    """Days of date_range without any completed workout."""
    active = {workout_date(w, tz) for w in filter_by_range(workouts, date_range, tz)}
    return date_range.days - len(active)


def best_workout(workouts: Iterable[Workout], tz: tzinfo | None = None) -> Workout | None:
    """Completed workout with the highest total volume; None when there is none."""
    completed = sorted(
        (w for w in workouts if w.is_completed),
        key=lambda w: workout_instant(w, tz),
    )
    best: Workout | None = None
    for w in completed:
        if best is None or w.total_volume > best.total_volume:
            best = w
    return best


def period_summary(
    workouts: Iterable[Workout],
    date_range: DateRange,
    tz: tzinfo | None = None,
) -> PeriodSummary:
    """
    Summarize the completed workouts inside one period.

    Args:
        workouts: Full workout snapshot
        date_range: Period to summarize
        tz: Timezone for local dates

    Returns:
        PeriodSummary
    """
    in_period = filter_by_range(workouts, date_range, tz)
    return PeriodSummary(
        period=date_range,
        total_sets=total_sets(in_period),
        rest_days=rest_days(in_period, date_range, tz),
        best_workout=best_workout(in_period, tz),
        volume_by_day=volume_by_day(in_period, date_range, tz),
    )
