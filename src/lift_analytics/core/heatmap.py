"""
Contribution heatmap: a calendar grid of workout activity.

The grid has one column per Monday-based week and seven rows (Monday ..
Sunday).  It spans the Monday on/before the period start to the Sunday
on/after the period end, so it is always rectangular; padding days are
kept with is_in_period=False instead of being dropped.

Periods longer than HEATMAP_MAX_DAYS are capped to the most recent
HEATMAP_MAX_DAYS days and reported with is_capped_to_year=True so the
caller can tell the user.

Scopes:
- cell counts: every grid day (padding cells are rendered faded);
- total_workouts, average_workouts_per_week, most_active_day: the
  effective (capped) period;
- longest_streak ("best streak"): the requested period before capping,
  i.e. the whole history for "all_time";
- current_streak: all history, ending today or yesterday.
"""

from datetime import date, timedelta, tzinfo
from typing import Iterable

from .config import (
    HEATMAP_LEVEL_THRESHOLDS,
    HEATMAP_MAX_DAYS,
    WEEKDAY_NAMES,
    validate_level_thresholds,
)
from .dates import month_boundaries, monday_on_or_before, sunday_on_or_after, today_local
from .models import DateRange, Heatmap, HeatmapCell, Workout
from .periods import earliest_workout_day, resolve_period
from .stats import round_half_up
from .streaks import current_streak_from_days, daily_workout_counts, longest_streak_from_days


def intensity_level(
    count: int,
    thresholds: tuple[int, ...] = HEATMAP_LEVEL_THRESHOLDS,
) -> int:
    """
    Discretize a daily workout count into a legend level.

    level = number of thresholds <= count.  With the default (1, 2, 3):
    0 workouts -> 0, 1 -> 1, 2 -> 2, 3+ -> 3.
    """
    return sum(1 for t in thresholds if count >= t)


def cap_period(period: DateRange, max_days: int = HEATMAP_MAX_DAYS) -> tuple[DateRange, bool]:
    """
    Cap a period to its most recent max_days days.

    Returns:
        Tuple (effective range, was_capped)
    """
    if period.days <= max_days:
        return period, False
    return DateRange(period.end - timedelta(days=max_days - 1), period.end), True


def build_heatmap(
    workouts: Iterable[Workout],
    period: str | DateRange,
    *,
    today: date | None = None,
    tz: tzinfo | None = None,
    level_thresholds: tuple[int, ...] = HEATMAP_LEVEL_THRESHOLDS,
    max_days: int = HEATMAP_MAX_DAYS,
) -> Heatmap:
    """
    Build the contribution heatmap for a period.

    Args:
        workouts: Workout snapshot (only completed workouts count)
        period: Inclusive DateRange or a preset name (see core/periods.py)
        today: Reference day for presets and is_today (defaults to local today)
        tz: Timezone for local dates
        level_thresholds: Intensity thresholds (see intensity_level())
        max_days: Cap for the displayed period

    Returns:
        Heatmap

    Raises:
        ValueError: If the preset name or thresholds are invalid
    """
    validate_level_thresholds(level_thresholds)
    workouts = list(workouts)
    if today is None:
        today = today_local(tz)

    if isinstance(period, str):
        requested = resolve_period(period, today, earliest_workout_day(workouts, tz))
    else:
        requested = period
    effective, capped = cap_period(requested, max_days)

    counts = daily_workout_counts(workouts, tz)

    grid_start = monday_on_or_before(effective.start)
    grid_end = sunday_on_or_after(effective.end)

    weeks: list[list[HeatmapCell]] = []
    weekday_totals = [0] * 7
    total_in_period = 0
    day = grid_start
    while day <= grid_end:
        week: list[HeatmapCell] = []
        for weekday in range(7):
            count = counts.get(day, 0)
            in_period = effective.contains(day)
            if in_period:
                weekday_totals[weekday] += count
                total_in_period += count
            week.append(
                HeatmapCell(
                    date=day,
                    count=count,
                    intensity_level=intensity_level(count, level_thresholds),
                    is_today=day == today,
                    is_in_period=in_period,
                )
            )
            day += timedelta(days=1)
        weeks.append(week)

    most_active_day = None
    if total_in_period > 0:
        # max() returns the first maximum, i.e. the earliest weekday
        best = max(range(7), key=lambda i: weekday_totals[i])
        most_active_day = WEEKDAY_NAMES[best]

    streak_days = [d for d in counts if requested.contains(d)]

    return Heatmap(
        cells=weeks,
        period=effective,
        total_weeks=len(weeks),
        is_capped_to_year=capped,
        legend_levels=list(range(len(level_thresholds) + 1)),
        longest_streak=longest_streak_from_days(streak_days),
        current_streak=current_streak_from_days(counts.keys(), today),
        average_workouts_per_week=round_half_up(total_in_period / len(weeks), 1),
        most_active_day=most_active_day,
        total_workouts=total_in_period,
        month_labels=month_boundaries(grid_start, grid_end),
    )
