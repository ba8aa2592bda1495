"""Shared Typer app object, shared option types, and store utilities."""

from datetime import tzinfo
from pathlib import Path
from typing import Annotated, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import typer

from ..core.config import AnalyticsSettings
from ..core.engine.config_loader import load_settings
from ..core.exercises.registry import get_metadata_catalog
from ..core.models import ExerciseMetadata, Workout
from ..io.serializers import ValidationError
from ..io.workout_store import WorkoutStore, get_default_data_path, load_metadata_file
from . import views

# Shared option types used across all commands
DataPathOption = Annotated[
    Optional[Path],
    typer.Option("--data-path", "-p", help="Path to workout export (JSON or JSONL)"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]
TzOption = Annotated[
    Optional[str],
    typer.Option("--tz", help="IANA timezone for calendar days (default: system local)"),
]
PeriodOption = Annotated[
    Optional[str],
    typer.Option("--period", help="Period preset, e.g. last_30_days, this_month, all_time"),
]

app = typer.Typer(
    name="lift-analytics",
    help="Strength-training analytics: 1RM estimates, trends, muscle balance and activity.",
    no_args_is_help=True,
)


def get_store(data_path: Path | None) -> WorkoutStore:
    """Get workout store from path or default location."""
    if data_path is None:
        data_path = get_default_data_path()
    return WorkoutStore(data_path)


def load_workouts_or_exit(data_path: Path | None) -> list[Workout]:
    """Load every workout, printing an error and exiting with 1 on failure."""
    store = get_store(data_path)

    if not store.exists():
        views.print_error(f"Workout file not found: {store.data_path}")
        views.print_info("Export your workouts to this path or pass --data-path.")
        raise typer.Exit(1)

    try:
        return store.load_workouts()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def resolve_tz(tz_name: str | None) -> tzinfo | None:
    """Turn a --tz value into a tzinfo (None keeps system local time)."""
    if tz_name is None:
        return None
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        views.print_error(f"Unknown timezone: {tz_name}")
        raise typer.Exit(1)


def get_settings() -> AnalyticsSettings:
    """Analytics settings from bundled + user YAML."""
    return load_settings()


def get_metadata(metadata_path: Path | None) -> dict[str, ExerciseMetadata]:
    """Bundled exercise catalogue, overlaid with an optional metadata file."""
    catalog = dict(get_metadata_catalog())
    if metadata_path is None:
        return catalog
    try:
        catalog.update(load_metadata_file(metadata_path))
    except (OSError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    return catalog
