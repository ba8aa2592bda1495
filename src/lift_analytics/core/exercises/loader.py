"""
YAML → ExerciseMetadata loader.

Loads the exercise catalogue from the bundled ``exercises.yaml``, a mapping
of exercise id to muscle metadata.  User overrides live in
``~/.lift-analytics/exercises.yaml``; that file is deep-merged over the
bundled catalogue, so only changed keys need to be listed, and unknown ids
are added as new exercises.

Usage (internal, called by registry.py):
    from .loader import load_metadata_from_yaml
    catalog = load_metadata_from_yaml()
"""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Any

from ..engine.config_loader import (
    _load_yaml_file,
    deep_merge,
    get_bundled_yaml_path,
    get_user_yaml_path,
)
from ..models import ExerciseMetadata

CATALOG_FILENAME = "exercises.yaml"


def metadata_from_dict(exercise_id: str, d: dict[str, Any]) -> ExerciseMetadata:
    """Convert a raw catalogue entry to ExerciseMetadata, raising ValueError on bad fields."""
    primary = d.get("primary_muscle")
    if not isinstance(primary, str) or not primary.strip():
        raise ValueError("primary_muscle is required")

    secondary = d.get("secondary_muscles") or []
    if not isinstance(secondary, list):
        raise ValueError("secondary_muscles must be a list")

    equipment = d.get("equipment")
    name = d.get("name")
    return ExerciseMetadata(
        id=str(exercise_id),
        primary_muscle=primary.strip(),
        equipment=str(equipment) if equipment is not None else None,
        name=str(name) if name is not None else None,
        secondary_muscles=tuple(str(m) for m in secondary),
    )


def catalog_from_dict(raw: dict[str, Any], source: str) -> dict[str, ExerciseMetadata]:
    """Convert a whole catalogue mapping; bad entries are skipped with a warning."""
    result: dict[str, ExerciseMetadata] = {}
    for exercise_id, entry in raw.items():
        if not isinstance(entry, dict):
            warnings.warn(
                f"lift-analytics: skipping exercise '{exercise_id}' in {source} "
                "(entry must be a mapping)",
                stacklevel=2,
            )
            continue
        try:
            result[str(exercise_id)] = metadata_from_dict(str(exercise_id), entry)
        except ValueError as exc:
            warnings.warn(
                f"lift-analytics: skipping exercise '{exercise_id}' in {source} ({exc})",
                stacklevel=2,
            )
    return result


def load_metadata_from_yaml(
    bundled_path: Path | None = None,
    user_path: Path | None = None,
) -> dict[str, ExerciseMetadata]:
    """
    Return {exercise_id: ExerciseMetadata} from bundled + user YAML.

    Args:
        bundled_path: Catalogue to load (defaults to the packaged one)
        user_path: Override file (defaults to ~/.lift-analytics/exercises.yaml
            when it exists)

    Returns:
        Catalogue dict; empty if nothing could be loaded
    """
    if bundled_path is None:
        bundled_path = get_bundled_yaml_path(CATALOG_FILENAME)
    if user_path is None:
        user_path = get_user_yaml_path(CATALOG_FILENAME)

    raw = _load_yaml_file(bundled_path)
    source = str(bundled_path)
    if user_path is not None:
        user_raw = _load_yaml_file(user_path)
        if user_raw:
            raw = deep_merge(raw, user_raw)
            source = f"{bundled_path} + {user_path}"

    return catalog_from_dict(raw, source)
