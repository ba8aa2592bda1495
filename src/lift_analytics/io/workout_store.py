"""
Read-only workout storage.

The workout store itself is an external system; this module reads an export
of it: either a JSON array of workout documents or JSONL with one workout per
line.  Analytics never writes workouts back.
"""

import json
from pathlib import Path

import yaml

from ..core.engine.config_loader import user_config_dir
from ..core.models import ExerciseMetadata, Workout
from .serializers import ValidationError, dict_to_metadata, dict_to_workout


class WorkoutStore:
    """
    Loads workouts from a JSON or JSONL export.

    Format is detected from the first non-blank character: "[" means a JSON
    array, anything else is treated as JSONL.  Blank lines in JSONL are
    skipped.
    """

    def __init__(self, data_path: str | Path):
        """
        Initialize the store.

        Args:
            data_path: Path to the workout export
        """
        self.data_path = Path(data_path)

    def exists(self) -> bool:
        """Check if the workout file exists."""
        return self.data_path.exists()

    def _read_documents(self) -> list[tuple[int, object]]:
        """Return (record number, raw document) pairs from the file."""
        with open(self.data_path, "r", encoding="utf-8") as f:
            text = f.read()

        if text.lstrip().startswith("["):
            try:
                docs = json.loads(text)
            except json.JSONDecodeError as e:
                raise ValidationError(f"Invalid JSON in {self.data_path}: {e}") from e
            return list(enumerate(docs, 1))

        records: list[tuple[int, object]] = []
        for line_num, line in enumerate(text.splitlines(), 1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append((line_num, json.loads(line)))
            except json.JSONDecodeError as e:
                raise ValidationError(
                    f"Error parsing line {line_num} in {self.data_path}: Invalid JSON: {e}"
                ) from e
        return records

    def load_workouts(self) -> list[Workout]:
        """
        Load all workouts.

        Returns:
            Workouts in file order (analytics functions sort as needed)

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValidationError: If a record is malformed
        """
        if not self.data_path.exists():
            raise FileNotFoundError(f"Workout file not found: {self.data_path}")

        workouts: list[Workout] = []
        for record_num, data in self._read_documents():
            try:
                workouts.append(dict_to_workout(data))
            except ValidationError as e:
                raise ValidationError(
                    f"Error parsing record {record_num} in {self.data_path}: {e}"
                ) from e
        return workouts

    def load_completed(self) -> list[Workout]:
        """Load only workouts with status "completed"."""
        return [w for w in self.load_workouts() if w.is_completed]


def load_metadata_file(path: str | Path) -> dict[str, ExerciseMetadata]:
    """
    Load exercise metadata from a YAML or JSON mapping of id -> document.

    Args:
        path: Metadata file

    Returns:
        {exercise_id: ExerciseMetadata}

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file is not a mapping or an entry is malformed
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValidationError(f"Invalid metadata file {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValidationError(f"Metadata file {path} must contain a mapping of exercise ids")
    return {str(k): dict_to_metadata(str(k), v) for k, v in raw.items()}


def get_default_data_path() -> Path:
    """Default workout export location: ~/.lift-analytics/workouts.jsonl."""
    return user_config_dir() / "workouts.jsonl"


def get_default_store() -> WorkoutStore:
    """Get a WorkoutStore with the default path."""
    return WorkoutStore(get_default_data_path())
