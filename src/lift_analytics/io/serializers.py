"""
JSON serialization for workout records.

Converts between the workout store's documents (camelCase keys, several
timestamp encodings) and the frozen dataclasses in core/models.py.  Every
record is validated here so analytics never sees a malformed workout.
"""

import json
import warnings
from datetime import datetime, timezone
from typing import Any

from ..core.models import ExerciseEntry, ExerciseMetadata, Workout, WorkoutSet

# Tolerance when comparing a stored totalVolume with the recomputed one
_VOLUME_TOLERANCE = 1e-6


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def _get(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key (camelCase or snake_case spelling)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def parse_timestamp(value: Any, field_name: str = "timestamp") -> datetime:
    """
    Parse a store timestamp into a datetime.

    Accepts:
      - datetime instances (returned unchanged)
      - ISO-8601 strings, with "Z" or an offset, or naive local time
      - epoch seconds (int/float), interpreted as UTC
      - {"seconds": s, "nanoseconds": ns} (also "_seconds"/"_nanoseconds")

    Args:
        value: Raw timestamp value
        field_name: Name for error messages

    Returns:
        datetime (aware unless the input was naive)

    Raises:
        ValidationError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value

    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}: {value!r}")

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValidationError(f"Invalid {field_name}: {value!r}") from e

    if isinstance(value, dict):
        seconds = _get(value, "seconds", "_seconds")
        if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
            raise ValidationError(f"Invalid {field_name}: {value!r}")
        nanos = _get(value, "nanoseconds", "_nanoseconds", default=0)
        return parse_timestamp(seconds + nanos / 1e9, field_name)

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as e:
            raise ValidationError(
                f"Invalid {field_name}: {value!r}. Expected an ISO-8601 timestamp"
            ) from e

    raise ValidationError(f"Invalid {field_name}: {value!r}")


def format_timestamp(value: datetime | None) -> str | None:
    """ISO-8601 string for a datetime, or None."""
    return value.isoformat() if value is not None else None


def dict_to_set(data: dict[str, Any]) -> WorkoutSet:
    """
    Convert dict to WorkoutSet.

    The set type may be stored as "type" or "set_type"/"setType".

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Set must be an object, got {type(data).__name__}")
    if "weight" not in data or "reps" not in data:
        raise ValidationError("Set requires 'weight' and 'reps'")

    reps = data["reps"]
    # JSON has no int type distinction; 10.0 is a valid rep count
    if isinstance(reps, float) and reps.is_integer():
        reps = int(reps)

    try:
        return WorkoutSet(
            weight=data["weight"],
            reps=reps,
            rpe=data.get("rpe"),
            set_type=_get(data, "type", "set_type", "setType", default="normal"),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(str(e)) from e


def set_to_dict(workout_set: WorkoutSet) -> dict[str, Any]:
    """Convert WorkoutSet to JSON-compatible dict."""
    d: dict[str, Any] = {
        "weight": workout_set.weight,
        "reps": workout_set.reps,
        "type": workout_set.set_type,
    }
    if workout_set.rpe is not None:
        d["rpe"] = workout_set.rpe
    return d


def dict_to_exercise_entry(data: dict[str, Any]) -> ExerciseEntry:
    """
    Convert dict to ExerciseEntry.

    Raises:
        ValidationError: If data is invalid (the message names the set index)
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Exercise must be an object, got {type(data).__name__}")

    exercise_id = _get(data, "exerciseId", "exercise_id")
    if not isinstance(exercise_id, str) or not exercise_id:
        raise ValidationError("Exercise requires a non-empty 'exerciseId'")

    raw_sets = data.get("sets") or []
    if not isinstance(raw_sets, list):
        raise ValidationError(f"Exercise {exercise_id!r}: 'sets' must be a list")

    sets = []
    for i, raw in enumerate(raw_sets):
        try:
            sets.append(dict_to_set(raw))
        except ValidationError as e:
            raise ValidationError(f"set {i}: {e}") from e

    name = _get(data, "exerciseName", "exercise_name", default=exercise_id)
    return ExerciseEntry(exercise_id=exercise_id, exercise_name=str(name), sets=tuple(sets))


def exercise_entry_to_dict(entry: ExerciseEntry) -> dict[str, Any]:
    """Convert ExerciseEntry to JSON-compatible dict."""
    return {
        "exerciseId": entry.exercise_id,
        "exerciseName": entry.exercise_name,
        "sets": [set_to_dict(s) for s in entry.sets],
    }


def dict_to_workout(data: dict[str, Any]) -> Workout:
    """
    Convert a stored workout document to Workout.

    total_volume is recomputed from the sets; a stored "totalVolume" that
    disagrees is reported with a warning and ignored.

    Args:
        data: Dict representation (camelCase or snake_case keys)

    Returns:
        Workout instance

    Raises:
        ValidationError: If data is invalid.  Messages name the workout id
            and the exercise/set index of the offending record.
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Workout must be an object, got {type(data).__name__}")

    workout_id = str(_get(data, "id", default=""))
    label = f"Workout {workout_id!r}" if workout_id else "Workout"

    try:
        started_raw = _get(data, "startedAt", "started_at")
        completed_raw = _get(data, "completedAt", "completed_at")
        if started_raw is None:
            # Imported/backfilled workouts sometimes carry only completedAt
            started_raw = completed_raw
        if started_raw is None:
            raise ValidationError("missing 'startedAt'")
        started_at = parse_timestamp(started_raw, "startedAt")
        completed_at = (
            parse_timestamp(completed_raw, "completedAt") if completed_raw is not None else None
        )

        raw_exercises = data.get("exercises") or []
        if not isinstance(raw_exercises, list):
            raise ValidationError("'exercises' must be a list")
        exercises = []
        for i, raw in enumerate(raw_exercises):
            try:
                exercises.append(dict_to_exercise_entry(raw))
            except ValidationError as e:
                raise ValidationError(f"exercise {i}: {e}") from e

        duration = data.get("duration")
        workout = Workout(
            id=workout_id,
            user_id=str(_get(data, "userId", "user_id", default="")),
            status=data.get("status", "completed"),
            started_at=started_at,
            completed_at=completed_at,
            exercises=tuple(exercises),
            duration=int(duration) if duration is not None else None,
        )
    except ValidationError as e:
        raise ValidationError(f"{label}: {e}") from e
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{label}: {e}") from e

    stored_volume = _get(data, "totalVolume", "total_volume")
    if isinstance(stored_volume, (int, float)) and not isinstance(stored_volume, bool):
        if abs(stored_volume - workout.total_volume) > _VOLUME_TOLERANCE:
            warnings.warn(
                f"lift-analytics: {label} stores totalVolume={stored_volume} but its sets "
                f"sum to {workout.total_volume}; using the recomputed value",
                stacklevel=2,
            )

    return workout


def workout_to_dict(workout: Workout) -> dict[str, Any]:
    """
    Convert Workout to JSON-compatible dict (camelCase, ISO timestamps).

    Args:
        workout: Workout to convert

    Returns:
        Dict representation
    """
    d: dict[str, Any] = {
        "id": workout.id,
        "userId": workout.user_id,
        "status": workout.status,
        "startedAt": format_timestamp(workout.started_at),
        "completedAt": format_timestamp(workout.completed_at),
        "exercises": [exercise_entry_to_dict(e) for e in workout.exercises],
        "totalVolume": workout.total_volume,
    }
    if workout.duration is not None:
        d["duration"] = workout.duration
    return d


def workout_to_json_line(workout: Workout) -> str:
    """Serialize a Workout to a compact single JSON line."""
    return json.dumps(workout_to_dict(workout), separators=(",", ":"))


def json_line_to_workout(line: str) -> Workout:
    """
    Deserialize a JSON line to a Workout.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(line.strip())
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e

    return dict_to_workout(data)


def dict_to_metadata(exercise_id: str, data: dict[str, Any]) -> ExerciseMetadata:
    """
    Convert an exercise document to ExerciseMetadata.

    Accepts camelCase ("primaryMuscle", "secondaryMuscles") or snake_case keys.
    A missing or empty primary muscle is kept as "" so that the muscle
    aggregator buckets the exercise as "other".

    Raises:
        ValidationError: If data is not an object or has malformed fields
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Exercise metadata {exercise_id!r} must be an object, got {type(data).__name__}"
        )

    primary = _get(data, "primaryMuscle", "primary_muscle", default="")
    if not isinstance(primary, str):
        raise ValidationError(f"Exercise metadata {exercise_id!r}: primaryMuscle must be a string")

    secondary = _get(data, "secondaryMuscles", "secondary_muscles", default=[])
    if not isinstance(secondary, list):
        raise ValidationError(
            f"Exercise metadata {exercise_id!r}: secondaryMuscles must be a list"
        )

    equipment = data.get("equipment")
    name = data.get("name")
    return ExerciseMetadata(
        id=exercise_id,
        primary_muscle=primary.strip(),
        equipment=str(equipment) if equipment is not None else None,
        name=str(name) if name is not None else None,
        secondary_muscles=tuple(str(m) for m in secondary),
    )


def metadata_to_dict(metadata: ExerciseMetadata) -> dict[str, Any]:
    """Convert ExerciseMetadata to JSON-compatible dict."""
    return {
        "name": metadata.name,
        "primaryMuscle": metadata.primary_muscle,
        "equipment": metadata.equipment,
        "secondaryMuscles": list(metadata.secondary_muscles),
    }
