"""
Exercise metadata registry.

The catalogue is loaded lazily from YAML on first use and cached.  Callers
that receive metadata from the workout store can pass their own mapping to
the analytics functions instead; this registry is the bundled default.
"""

from ..models import ExerciseMetadata
from .loader import load_metadata_from_yaml

_CATALOG: dict[str, ExerciseMetadata] | None = None


def get_metadata_catalog() -> dict[str, ExerciseMetadata]:
    """Return the cached {exercise_id: ExerciseMetadata} catalogue."""
    global _CATALOG
    if _CATALOG is None:
        _CATALOG = load_metadata_from_yaml()
    return _CATALOG


def get_metadata(exercise_id: str) -> ExerciseMetadata | None:
    """
    Look up one exercise.

    Returns:
        ExerciseMetadata, or None when the exercise is not catalogued
        (the muscle aggregator then buckets it as "other")
    """
    return get_metadata_catalog().get(exercise_id)


def reset_catalog() -> None:
    """Drop the cached catalogue so the next lookup reloads YAML."""
    global _CATALOG
    _CATALOG = None
