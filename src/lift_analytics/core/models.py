"""
Data models for lift-analytics.

Raw records (WorkoutSet, ExerciseEntry, Workout, ExerciseMetadata) come from
the external workout store and are validated on construction so that a bad
record fails where it enters the engine.  Derived structures (HistoryPoint,
HeatmapCell, ...) are produced by the pure functions in core/.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterator, Literal

from .config import RPE_MAX, RPE_MIN, SET_TYPES, WORKOUT_STATUSES

SetType = Literal["normal", "warmup", "dropset", "superset", "failure"]
WorkoutStatus = Literal["active", "completed", "cancelled"]
TrendDirection = Literal["up", "down", "flat", "insufficient_data"]
AggregationMode = Literal["sets", "volume"]


def _require_number(value: object, name: str) -> None:
    # bool is an int subclass but never a valid measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}")


@dataclass(frozen=True)
class WorkoutSet:
    """
    A single logged set: weight x reps with optional RPE.

    Immutable once logged.
    """

    weight: float
    reps: int
    rpe: float | None = None
    set_type: SetType = "normal"

    def __post_init__(self) -> None:
        """Validate set data."""
        _require_number(self.weight, "weight")
        if isinstance(self.reps, bool) or not isinstance(self.reps, int):
            raise TypeError(f"reps must be an integer, got {type(self.reps).__name__}")
        if self.weight < 0:
            raise ValueError(f"weight must be non-negative, got {self.weight}")
        if self.reps < 1:
            raise ValueError(f"reps must be at least 1, got {self.reps}")
        if self.rpe is not None:
            _require_number(self.rpe, "rpe")
            if not RPE_MIN <= self.rpe <= RPE_MAX:
                raise ValueError(
                    f"rpe must be between {RPE_MIN:g} and {RPE_MAX:g}, got {self.rpe}"
                )
        if self.set_type not in SET_TYPES:
            raise ValueError(f"Invalid set_type: {self.set_type}")

    @property
    def volume(self) -> float:
        """Training volume of the set (weight x reps)."""
        return self.weight * self.reps


@dataclass(frozen=True)
class ExerciseEntry:
    """One exercise performed within a workout, with its ordered sets."""

    exercise_id: str
    exercise_name: str
    sets: tuple[WorkoutSet, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.exercise_id, str) or not self.exercise_id:
            raise ValueError("exercise_id must be a non-empty string")
        # Accept any sequence from callers but store it immutably
        object.__setattr__(self, "sets", tuple(self.sets))
        for s in self.sets:
            if not isinstance(s, WorkoutSet):
                raise TypeError(f"sets must contain WorkoutSet, got {type(s).__name__}")

    @property
    def volume(self) -> float:
        """Sum of weight x reps over all sets."""
        return sum(s.volume for s in self.sets)


@dataclass(frozen=True)
class Workout:
    """
    A workout session as stored by the external store.

    total_volume is always recomputed from the sets, so it cannot drift
    from the underlying data.
    """

    id: str
    user_id: str
    status: WorkoutStatus
    started_at: datetime
    completed_at: datetime | None = None
    exercises: tuple[ExerciseEntry, ...] = ()
    duration: int | None = None  # seconds
    total_volume: float = field(init=False)

    def __post_init__(self) -> None:
        """Validate workout data and derive total_volume."""
        if self.status not in WORKOUT_STATUSES:
            raise ValueError(f"Invalid status: {self.status}")
        if not isinstance(self.started_at, datetime):
            raise TypeError("started_at must be a datetime")
        if self.completed_at is not None and not isinstance(self.completed_at, datetime):
            raise TypeError("completed_at must be a datetime or None")
        if self.status == "completed" and self.completed_at is None:
            raise ValueError(f"Completed workout {self.id!r} has no completed_at")
        if self.duration is not None and self.duration < 0:
            raise ValueError("duration must be non-negative")

        object.__setattr__(self, "exercises", tuple(self.exercises))
        for entry in self.exercises:
            if not isinstance(entry, ExerciseEntry):
                raise TypeError(
                    f"exercises must contain ExerciseEntry, got {type(entry).__name__}"
                )
        object.__setattr__(self, "total_volume", sum(e.volume for e in self.exercises))

    @property
    def is_completed(self) -> bool:
        """True if the workout counts toward analytics."""
        return self.status == "completed"

    @property
    def set_count(self) -> int:
        """Number of sets across all exercises."""
        return sum(len(e.sets) for e in self.exercises)

    def entries_for(self, exercise_id: str) -> list[ExerciseEntry]:
        """Return every entry of the given exercise in logging order."""
        return [e for e in self.exercises if e.exercise_id == exercise_id]


class ActiveWorkout:
    """
    Append-only log for a workout in progress.

    Sets can only be appended while the session is active; finish() or
    cancel() freezes the log into an immutable Workout.  Analytics only
    ever see the frozen form.
    """

    def __init__(self, workout_id: str, user_id: str, started_at: datetime):
        self.id = workout_id
        self.user_id = user_id
        self.started_at = started_at
        self._entries: list[tuple[str, str, list[WorkoutSet]]] = []
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError(f"Workout {self.id!r} is already closed")

    def add_exercise(self, exercise_id: str, exercise_name: str) -> int:
        """
        Append an exercise to the session.

        Returns:
            Index of the new entry, used by add_set()
        """
        self._check_open()
        self._entries.append((exercise_id, exercise_name, []))
        return len(self._entries) - 1

    def add_set(self, entry_index: int, workout_set: WorkoutSet) -> None:
        """Append a set to an existing exercise entry."""
        self._check_open()
        if not 0 <= entry_index < len(self._entries):
            raise IndexError(f"No exercise entry at index {entry_index}")
        self._entries[entry_index][2].append(workout_set)

    def _freeze(self, status: WorkoutStatus, completed_at: datetime | None) -> Workout:
        self._check_open()
        self._closed = True
        duration = None
        if completed_at is not None:
            duration = max(0, int((completed_at - self.started_at).total_seconds()))
        return Workout(
            id=self.id,
            user_id=self.user_id,
            status=status,
            started_at=self.started_at,
            completed_at=completed_at,
            exercises=tuple(
                ExerciseEntry(ex_id, name, tuple(sets))
                for ex_id, name, sets in self._entries
            ),
            duration=duration,
        )

    def finish(self, completed_at: datetime) -> Workout:
        """Freeze the log into a completed Workout."""
        return self._freeze("completed", completed_at)

    def cancel(self) -> Workout:
        """Freeze the log into a cancelled Workout (ignored by analytics)."""
        return self._freeze("cancelled", None)


@dataclass(frozen=True)
class ExerciseMetadata:
    """Static exercise lookup data supplied by the exercise library."""

    id: str
    primary_muscle: str
    equipment: str | None = None
    name: str | None = None
    secondary_muscles: tuple[str, ...] = ()


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of local calendar dates."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"DateRange end {self.end} is before start {self.start}")

    @property
    def days(self) -> int:
        """Number of calendar days covered (inclusive)."""
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        """True if day lies within the range."""
        return self.start <= day <= self.end

    def iter_days(self) -> Iterator[date]:
        """Yield each date in the range in order."""
        for offset in range(self.days):
            yield self.start + timedelta(days=offset)


@dataclass(frozen=True)
class HistoryPoint:
    """
    One workout's performance on a single exercise.

    best_set / estimated_1rm are None when no set yields a reliable
    estimate; consumers treat that as a gap, never as zero.
    """

    date: datetime  # local completion time
    workout_id: str
    sets: tuple[WorkoutSet, ...]
    best_set: WorkoutSet | None
    estimated_1rm: float | None

    @property
    def day(self) -> date:
        """Local calendar date of the workout."""
        return self.date.date()


@dataclass(frozen=True)
class TrendResult:
    """Direction of an exercise's estimated-1RM trend."""

    direction: TrendDirection
    percentage: float
    confidence: float  # 0..100

    @classmethod
    def insufficient(cls) -> "TrendResult":
        return cls(direction="insufficient_data", percentage=0.0, confidence=0.0)


@dataclass(frozen=True)
class ExerciseStats:
    """Summary statistics for one exercise across completed workouts."""

    total_sets: int
    total_volume: float
    times_performed: int
    personal_record: WorkoutSet | None
    personal_record_date: datetime | None
    best_point: HistoryPoint | None
    average_weight: float | None
    average_reps: int | None
    average_rpe: float | None
    last_performed: datetime | None

    @property
    def has_data(self) -> bool:
        return self.total_sets > 0

    @classmethod
    def empty(cls) -> "ExerciseStats":
        return cls(
            total_sets=0,
            total_volume=0.0,
            times_performed=0,
            personal_record=None,
            personal_record_date=None,
            best_point=None,
            average_weight=None,
            average_reps=None,
            average_rpe=None,
            last_performed=None,
        )


@dataclass(frozen=True)
class MuscleShare:
    """One muscle group's share of the training distribution."""

    muscle: str
    sets: int
    value: float  # set count or volume, depending on mode
    percentage: float


@dataclass(frozen=True)
class MuscleIntensity:
    """Normalized highlight strength for body-map visualizations."""

    muscle: str
    value: float
    intensity: float  # value / max value, 0..1
    opacity: float  # MUSCLE_OPACITY_MIN..MUSCLE_OPACITY_MAX


@dataclass(frozen=True)
class HeatmapCell:
    """A single day in the contribution heatmap."""

    date: date
    count: int
    intensity_level: int
    is_today: bool
    is_in_period: bool


@dataclass(frozen=True)
class Heatmap:
    """
    Contribution heatmap: weeks x 7 grid (Monday first) plus summary stats.

    cells[week][weekday]; the grid is always rectangular.
    """

    cells: list[list[HeatmapCell]]
    period: DateRange  # effective (possibly capped) period
    total_weeks: int
    is_capped_to_year: bool
    legend_levels: list[int]
    longest_streak: int
    current_streak: int
    average_workouts_per_week: float
    most_active_day: str | None
    total_workouts: int
    month_labels: list[tuple[int, int, int]]  # (year, month, first week index)

    @property
    def is_empty(self) -> bool:
        return self.total_workouts == 0


@dataclass(frozen=True)
class PeriodMetrics:
    """Aggregate training load for one time window."""

    volume: float
    workouts: int
    avg_volume: float


@dataclass(frozen=True)
class PeriodChange:
    """Current-vs-previous deltas."""

    volume_percentage: int
    workouts: int
    avg_volume_percentage: int


@dataclass(frozen=True)
class PeriodComparison:
    """Result of comparing two adjacent windows."""

    current_period: PeriodMetrics
    previous_period: PeriodMetrics
    change: PeriodChange


@dataclass(frozen=True)
class DailyVolume:
    """Training load of one local calendar day (zero on rest days)."""

    date: date
    volume: float
    workouts: int


@dataclass(frozen=True)
class PeriodSummary:
    """Descriptive totals of the completed workouts inside one period."""

    period: DateRange
    total_sets: int
    rest_days: int
    best_workout: Workout | None  # highest total_volume, earliest on ties
    volume_by_day: list[DailyVolume]
