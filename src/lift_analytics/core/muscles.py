"""
Muscle-group distribution of training.

aggregate_by_muscle() is the distribution behind the donut/volume charts;
muscle_intensities() is the single source of truth for body-map
highlighting, so every visualization agrees on which muscle is "most
trained".
"""

from typing import Iterable, Mapping

from .config import (
    MUSCLE_OPACITY_MAX,
    MUSCLE_OPACITY_MIN,
    MUSCLE_PRIMARY_FRACTION,
    OTHER_MUSCLE,
)
from .models import AggregationMode, ExerciseMetadata, MuscleIntensity, MuscleShare, Workout
from .stats import round_half_up

AGGREGATION_MODES: tuple[str, ...] = ("sets", "volume")


def resolve_muscle(
    exercise_id: str,
    metadata_by_id: Mapping[str, ExerciseMetadata],
) -> str:
    """Primary muscle of an exercise, or OTHER_MUSCLE if unknown."""
    meta = metadata_by_id.get(exercise_id)
    if meta is None or not meta.primary_muscle:
        return OTHER_MUSCLE
    return meta.primary_muscle


def aggregate_by_muscle(
    workouts: Iterable[Workout],
    metadata_by_id: Mapping[str, ExerciseMetadata],
    mode: AggregationMode = "sets",
) -> list[MuscleShare]:
    """
    Distribute completed sets (or volume) over primary muscle groups.

    Args:
        workouts: Workout snapshot (only completed workouts count)
        metadata_by_id: Exercise metadata keyed by exercise id
        mode: "sets" counts sets, "volume" sums weight x reps

    Returns:
        Shares sorted by value descending, then muscle name.  Empty when
        the total is zero, so no percentage is ever NaN or infinite.

    Raises:
        ValueError: If mode is not "sets" or "volume"
    """
    if mode not in AGGREGATION_MODES:
        raise ValueError(f"Invalid mode: {mode!r}. Must be one of {AGGREGATION_MODES}")

    set_counts: dict[str, int] = {}
    values: dict[str, float] = {}

    for workout in workouts:
        if not workout.is_completed:
            continue
        for entry in workout.exercises:
            if not entry.sets:
                continue
            muscle = resolve_muscle(entry.exercise_id, metadata_by_id)
            set_counts[muscle] = set_counts.get(muscle, 0) + len(entry.sets)
            if mode == "sets":
                values[muscle] = values.get(muscle, 0) + len(entry.sets)
            else:
                values[muscle] = values.get(muscle, 0.0) + entry.volume

    total = sum(values.values())
    if total <= 0:
        return []

    shares = [
        MuscleShare(
            muscle=muscle,
            sets=set_counts[muscle],
            value=value,
            percentage=100.0 * value / total,
        )
        for muscle, value in values.items()
    ]
    shares.sort(key=lambda s: (-s.value, s.muscle))
    return shares


def muscle_intensities(shares: Iterable[MuscleShare]) -> list[MuscleIntensity]:
    """
    Normalize muscle values linearly into [0, 1] relative to the maximum.

    opacity maps the same intensity onto
    [MUSCLE_OPACITY_MIN, MUSCLE_OPACITY_MAX] so even the least-trained
    muscle stays visible.  Order follows the input.

    Args:
        shares: Output of aggregate_by_muscle()

    Returns:
        One MuscleIntensity per share; empty for empty input
    """
    shares = list(shares)
    if not shares:
        return []

    max_value = max(s.value for s in shares)
    span = MUSCLE_OPACITY_MAX - MUSCLE_OPACITY_MIN

    result: list[MuscleIntensity] = []
    for s in shares:
        intensity = min(s.value / max_value, 1.0) if max_value > 0 else 0.0
        result.append(
            MuscleIntensity(
                muscle=s.muscle,
                value=s.value,
                intensity=intensity,
                opacity=round_half_up(MUSCLE_OPACITY_MIN + intensity * span, 2),
            )
        )
    return result


def most_trained_muscle(shares: Iterable[MuscleShare]) -> str | None:
    """Muscle with intensity 1.0 (first in sorted order), or None."""
    for item in muscle_intensities(shares):
        if item.intensity >= 1.0:
            return item.muscle
    return None


def group_by_intensity(
    intensities: Iterable[MuscleIntensity],
    primary_fraction: float = MUSCLE_PRIMARY_FRACTION,
) -> tuple[list[str], list[str]]:
    """
    Split muscles into primary and secondary highlight groups.

    Muscles at or above primary_fraction of the maximum are primary.

    Returns:
        Tuple (primary, secondary) of muscle names, input order preserved
    """
    primary: list[str] = []
    secondary: list[str] = []
    for item in intensities:
        if item.intensity > 0 and item.intensity >= primary_fraction:
            primary.append(item.muscle)
        else:
            secondary.append(item.muscle)
    return primary, secondary
