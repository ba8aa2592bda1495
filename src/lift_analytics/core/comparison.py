"""
Period-over-period comparison of training load.

    avg_volume        = volume / workouts            (0 when no workouts)
    volume_percentage = round((cur - prev) / prev * 100)
                        +100 when prev == 0 and cur > 0 (never infinite)
                        0    when both are 0
    workouts          = cur_workouts - prev_workouts (plain difference)
"""

from datetime import date, tzinfo
from typing import Iterable

from .models import DateRange, PeriodChange, PeriodComparison, PeriodMetrics, Workout
from .periods import earliest_workout_day, filter_by_range, previous_range, resolve_period
from .stats import round_half_up

# Reported when growing from nothing: a fixed +100% instead of infinity
NEW_ACTIVITY_PERCENTAGE = 100


def percentage_change(current: float, previous: float, ndigits: int = 0) -> float:
    """
    Relative change from previous to current, in percent.

    Args:
        current: Current value
        previous: Previous value
        ndigits: Decimal places to round to

    Returns:
        Rounded percentage; NEW_ACTIVITY_PERCENTAGE when previous is 0 and
        current is positive, 0 when neither is positive
    """
    if previous <= 0:
        return float(NEW_ACTIVITY_PERCENTAGE) if current > 0 else 0.0
    return round_half_up((current - previous) / previous * 100, ndigits)


def period_metrics(workouts: Iterable[Workout]) -> PeriodMetrics:
    """Volume, workout count and average volume of completed workouts."""
    completed = [w for w in workouts if w.is_completed]
    volume = sum(w.total_volume for w in completed)
    count = len(completed)
    return PeriodMetrics(
        volume=volume,
        workouts=count,
        avg_volume=volume / count if count > 0 else 0.0,
    )


def compare(
    current_workouts: Iterable[Workout],
    previous_workouts: Iterable[Workout],
) -> PeriodComparison:
    """
    Compare two adjacent windows of workouts.

    Args:
        current_workouts: Workouts of the current window
        previous_workouts: Workouts of the window before it

    Returns:
        PeriodComparison with integer percentage changes
    """
    current = period_metrics(current_workouts)
    previous = period_metrics(previous_workouts)
    return PeriodComparison(
        current_period=current,
        previous_period=previous,
        change=PeriodChange(
            volume_percentage=int(percentage_change(current.volume, previous.volume)),
            workouts=current.workouts - previous.workouts,
            avg_volume_percentage=int(
                percentage_change(current.avg_volume, previous.avg_volume)
            ),
        ),
    )


def compare_periods(
    workouts: Iterable[Workout],
    period: str | DateRange,
    today: date | None = None,
    tz: tzinfo | None = None,
) -> tuple[DateRange, DateRange, PeriodComparison]:
    """
    Split a full history into a period and the window before it, then compare.

    Returns:
        Tuple (current range, previous range, comparison)
    """
    workouts = list(workouts)
    if isinstance(period, str):
        first_day = earliest_workout_day(workouts, tz)
        current_range = resolve_period(period, today, first_day)
        prev_range = previous_range(period, today, first_day)
    else:
        current_range = period
        prev_range = previous_range(period)

    comparison = compare(
        filter_by_range(workouts, current_range, tz),
        filter_by_range(workouts, prev_range, tz),
    )
    return current_range, prev_range, comparison
