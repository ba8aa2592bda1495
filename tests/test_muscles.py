"""
Tests for muscle-group distribution and body-map intensities.
"""

from datetime import datetime

import pytest

from lift_analytics.core.models import ExerciseEntry, ExerciseMetadata, Workout, WorkoutSet
from lift_analytics.core.muscles import (
    aggregate_by_muscle,
    group_by_intensity,
    most_trained_muscle,
    muscle_intensities,
    resolve_muscle,
)

METADATA = {
    "bench": ExerciseMetadata(id="bench", primary_muscle="chest", equipment="barbell"),
    "squat": ExerciseMetadata(id="squat", primary_muscle="legs", equipment="barbell"),
    "row": ExerciseMetadata(id="row", primary_muscle="back"),
    "mystery": ExerciseMetadata(id="mystery", primary_muscle=""),
}


def _sets(weight: float, reps: int, count: int) -> tuple[WorkoutSet, ...]:
    return tuple(WorkoutSet(weight=weight, reps=reps) for _ in range(count))


def _workout(
    entries: list[tuple[str, tuple[WorkoutSet, ...]]],
    status: str = "completed",
    workout_id: str = "w1",
) -> Workout:
    when = datetime(2024, 3, 1, 10)
    return Workout(
        id=workout_id,
        user_id="u1",
        status=status,
        started_at=when,
        completed_at=when if status == "completed" else None,
        exercises=tuple(ExerciseEntry(ex_id, ex_id, sets) for ex_id, sets in entries),
    )


def _mixed_workouts() -> list[Workout]:
    return [
        _workout(
            [
                ("bench", _sets(100, 5, 3)),  # 3 sets, 1500 volume
                ("squat", _sets(140, 5, 2)),  # 2 sets, 1400 volume
                ("curl-machine", _sets(20, 10, 1)),  # 1 set, 200 volume
            ]
        ),
        _workout([("bench", _sets(500, 5, 10))], status="cancelled", workout_id="w2"),
    ]


class TestResolveMuscle:
    """Primary-muscle lookup with the "other" bucket."""

    def test_known(self):
        assert resolve_muscle("bench", METADATA) == "chest"

    def test_unknown_exercise(self):
        assert resolve_muscle("curl-machine", METADATA) == "other"

    def test_empty_primary_muscle(self):
        assert resolve_muscle("mystery", METADATA) == "other"


class TestAggregateByMuscle:
    """Set and volume distributions."""

    def test_sets_mode(self):
        shares = aggregate_by_muscle(_mixed_workouts(), METADATA, "sets")
        assert [(s.muscle, s.value) for s in shares] == [
            ("chest", 3),
            ("legs", 2),
            ("other", 1),
        ]
        assert [s.percentage for s in shares] == [
            pytest.approx(50.0),
            pytest.approx(100 / 3),
            pytest.approx(100 / 6),
        ]

    def test_volume_mode(self):
        shares = aggregate_by_muscle(_mixed_workouts(), METADATA, "volume")
        assert [(s.muscle, s.value) for s in shares] == [
            ("chest", 1500),
            ("legs", 1400),
            ("other", 200),
        ]
        assert shares[0].sets == 3
        assert sum(s.percentage for s in shares) == pytest.approx(100.0)

    def test_cancelled_workouts_ignored(self):
        shares = aggregate_by_muscle(_mixed_workouts(), METADATA)
        assert sum(s.sets for s in shares) == 6

    def test_ties_sorted_by_name(self):
        workouts = [_workout([("squat", _sets(100, 5, 2)), ("row", _sets(60, 8, 2))])]
        assert [s.muscle for s in aggregate_by_muscle(workouts, METADATA)] == ["back", "legs"]

    def test_empty_history(self):
        assert aggregate_by_muscle([], METADATA) == []

    def test_zero_volume_gives_empty(self):
        workouts = [_workout([("bench", _sets(0, 10, 3))])]
        assert aggregate_by_muscle(workouts, METADATA, "volume") == []

    def test_invalid_mode(self):
        with pytest.raises(ValueError, match="Invalid mode"):
            aggregate_by_muscle(_mixed_workouts(), METADATA, "reps")  # type: ignore[arg-type]


class TestMuscleIntensities:
    """Linear normalization and opacity mapping."""

    def test_intensity_and_opacity(self):
        intensities = muscle_intensities(aggregate_by_muscle(_mixed_workouts(), METADATA))
        assert [i.muscle for i in intensities] == ["chest", "legs", "other"]
        assert [i.intensity for i in intensities] == [
            pytest.approx(1.0),
            pytest.approx(2 / 3),
            pytest.approx(1 / 3),
        ]
        # 0.3 + 0.7 * intensity, two decimals
        assert [i.opacity for i in intensities] == [1.0, 0.77, 0.53]

    def test_empty(self):
        assert muscle_intensities([]) == []

    def test_most_trained(self):
        shares = aggregate_by_muscle(_mixed_workouts(), METADATA)
        assert most_trained_muscle(shares) == "chest"

    def test_most_trained_empty(self):
        assert most_trained_muscle([]) is None


class TestGroupByIntensity:
    """Primary/secondary highlight groups."""

    def test_default_fraction(self):
        intensities = muscle_intensities(aggregate_by_muscle(_mixed_workouts(), METADATA))
        primary, secondary = group_by_intensity(intensities)
        assert primary == ["chest", "legs"]
        assert secondary == ["other"]

    def test_custom_fraction(self):
        intensities = muscle_intensities(aggregate_by_muscle(_mixed_workouts(), METADATA))
        primary, secondary = group_by_intensity(intensities, primary_fraction=0.9)
        assert primary == ["chest"]
        assert secondary == ["legs", "other"]
