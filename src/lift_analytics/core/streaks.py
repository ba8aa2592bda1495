"""
Workout streaks: runs of consecutive local calendar days with at least
one completed workout.
"""

from datetime import date, timedelta, tzinfo
from typing import Iterable

from .dates import today_local, workout_date
from .models import DateRange, Workout


def daily_workout_counts(
    workouts: Iterable[Workout],
    tz: tzinfo | None = None,
    date_range: DateRange | None = None,
) -> dict[date, int]:
    """
    Count completed workouts per local calendar date.

    Args:
        workouts: Workout snapshot
        tz: Timezone for local dates
        date_range: Optional inclusive filter

    Returns:
        {date: count}, only for days with at least one workout
    """
    counts: dict[date, int] = {}
    for w in workouts:
        if not w.is_completed:
            continue
        day = workout_date(w, tz)
        if date_range is not None and not date_range.contains(day):
            continue
        counts[day] = counts.get(day, 0) + 1
    return counts


def longest_streak_from_days(days: Iterable[date]) -> int:
    """Longest run of consecutive dates in an unordered collection."""
    ordered = sorted(set(days))
    if not ordered:
        return 0

    best = current = 1
    for prev, day in zip(ordered, ordered[1:]):
        if (day - prev).days == 1:
            current += 1
            best = max(best, current)
        else:
            current = 1
    return best


def longest_streak(
    workouts: Iterable[Workout],
    tz: tzinfo | None = None,
    date_range: DateRange | None = None,
) -> int:
    """Best streak over the given workouts (optionally within a range)."""
    return longest_streak_from_days(daily_workout_counts(workouts, tz, date_range))


def current_streak_from_days(days: Iterable[date], today: date) -> int:
    """
    Length of the streak that is still alive on ``today``.

    A streak counts as alive if it ends today or yesterday (today's
    workout may simply not be logged yet).
    """
    active = set(days)
    cursor = today if today in active else today - timedelta(days=1)
    streak = 0
    while cursor in active:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def current_streak(
    workouts: Iterable[Workout],
    today: date | None = None,
    tz: tzinfo | None = None,
) -> int:
    """Current streak ending today or yesterday."""
    if today is None:
        today = today_local(tz)
    return current_streak_from_days(daily_workout_counts(workouts, tz), today)


def has_active_streak(
    workouts: Iterable[Workout],
    today: date | None = None,
    tz: tzinfo | None = None,
) -> bool:
    """True if there is a completed workout today or yesterday."""
    return current_streak(workouts, today, tz) > 0
