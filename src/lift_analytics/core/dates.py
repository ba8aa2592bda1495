"""
Local calendar-date helpers.

Every analytics bucket uses the user's local calendar day, never UTC: a
workout finished at 23:50 local time belongs to that day even when UTC has
already rolled over.

Timezone policy:
- aware datetimes are converted to ``tz`` (the system local zone when
  ``tz`` is None);
- naive datetimes are taken to be local wall-clock time already.
"""

from datetime import date, datetime, timedelta, timezone, tzinfo

from .models import Workout


def local_datetime(ts: datetime, tz: tzinfo | None = None) -> datetime:
    """
    Convert a timestamp to local wall-clock time (naive).

    Args:
        ts: Timestamp, aware or naive
        tz: Target timezone; None means the system local zone

    Returns:
        Naive datetime in local time
    """
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        return ts
    return ts.astimezone(tz).replace(tzinfo=None)


def local_date(ts: datetime, tz: tzinfo | None = None) -> date:
    """Local calendar date of a timestamp."""
    return local_datetime(ts, tz).date()


def workout_datetime(workout: Workout, tz: tzinfo | None = None) -> datetime:
    """Local completion time of a workout (start time if not completed)."""
    ts = workout.completed_at or workout.started_at
    return local_datetime(ts, tz)


def workout_instant(workout: Workout, tz: tzinfo | None = None) -> datetime:
    """
    Absolute completion instant of a workout, for ordering.

    Naive timestamps are local wall-clock time in tz and are made aware
    with it, so aware and naive values sort together.  Unlike local wall
    time this stays monotonic across a DST fall-back hour.
    """
    ts = workout.completed_at or workout.started_at
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        ts = ts.replace(tzinfo=tz) if tz is not None else ts.astimezone()
    return ts.astimezone(timezone.utc)


def workout_date(workout: Workout, tz: tzinfo | None = None) -> date:
    """Local calendar date a workout is bucketed under."""
    return workout_datetime(workout, tz).date()


def today_local(tz: tzinfo | None = None) -> date:
    """Today's date in the given (or system local) timezone."""
    return datetime.now(tz).date()


def monday_on_or_before(day: date) -> date:
    """Start of the Monday-based week containing day."""
    return day - timedelta(days=day.weekday())


def sunday_on_or_after(day: date) -> date:
    """End of the Monday-based week containing day."""
    return day + timedelta(days=6 - day.weekday())


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    """Last day of the month containing day."""
    if day.month == 12:
        return date(day.year, 12, 31)
    return date(day.year, day.month + 1, 1) - timedelta(days=1)


def month_boundaries(grid_start: date, grid_end: date) -> list[tuple[int, int, int]]:
    """
    Locate month starts inside a Monday-aligned grid.

    Args:
        grid_start: First grid day (a Monday)
        grid_end: Last grid day

    Returns:
        List of (year, month, week_index) for every month whose first day
        falls inside the grid, plus the grid's opening month at week 0.
    """
    if grid_end < grid_start:
        return []

    labels: list[tuple[int, int, int]] = [(grid_start.year, grid_start.month, 0)]
    cursor = end_of_month(grid_start) + timedelta(days=1)
    while cursor <= grid_end:
        week_index = (cursor - grid_start).days // 7
        if labels and labels[-1][2] == week_index:
            # Two month starts in one column: keep the newer month
            labels[-1] = (cursor.year, cursor.month, week_index)
        else:
            labels.append((cursor.year, cursor.month, week_index))
        cursor = end_of_month(cursor) + timedelta(days=1)
    return labels
