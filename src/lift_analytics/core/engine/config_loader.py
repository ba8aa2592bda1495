"""
YAML → typed config loader.

Loads analytics thresholds from analytics.yaml (bundled with the package)
and optionally merges user overrides from ~/.lift-analytics/analytics.yaml.

Usage:
    from lift_analytics.core.engine.config_loader import load_settings
    settings = load_settings()
    settings.trend_up_threshold   # 2.0 unless overridden

If the user override file has parse errors or invalid values, a warning is
issued and the bundled defaults are used instead.
"""

from __future__ import annotations

import importlib.resources
import os
import warnings
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from ..config import AnalyticsSettings

# YAML section/key -> AnalyticsSettings field
_SETTINGS_KEYS: dict[tuple[str, str], str] = {
    ("trend", "min_points"): "trend_min_points",
    ("trend", "up_threshold"): "trend_up_threshold",
    ("trend", "down_threshold"): "trend_down_threshold",
    ("trend", "full_confidence_points"): "trend_full_confidence_points",
    ("trend", "cv_penalty"): "trend_cv_penalty",
    ("heatmap", "max_days"): "heatmap_max_days",
    ("heatmap", "level_thresholds"): "heatmap_level_thresholds",
    ("muscles", "primary_fraction"): "muscle_primary_fraction",
    ("periods", "default"): "default_period",
}

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} if it cannot be parsed."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"lift-analytics: ignoring {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def user_config_dir() -> Path:
    """Return ~/.lift-analytics (may not exist)."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / ".lift-analytics"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path(filename: str = "analytics.yaml") -> Path:
    """Return the path to a YAML file bundled in the lift_analytics package."""
    ref = importlib.resources.files("lift_analytics").joinpath(filename)
    return Path(str(ref))


def get_user_yaml_path(filename: str = "analytics.yaml") -> Path | None:
    """Return ~/.lift-analytics/<filename> if it exists, else None."""
    p = user_config_dir() / filename
    return p if p.exists() else None


def load_model_config() -> dict[str, Any]:
    """
    Load and merge analytics configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/lift_analytics/analytics.yaml
    2. User override at ~/.lift-analytics/analytics.yaml

    Returns:
        Merged dict of config sections.
    """
    config = _load_yaml_file(get_bundled_yaml_path())

    user = get_user_yaml_path()
    if user is not None:
        user_cfg = _load_yaml_file(user)
        if user_cfg:
            config = deep_merge(config, user_cfg)

    return config


def settings_from_config(config: dict[str, Any]) -> AnalyticsSettings:
    """
    Build AnalyticsSettings from a merged config dict.

    Missing keys keep their Python defaults from config.py.

    Raises:
        ValueError: If a value has the wrong type or fails validation
    """
    kwargs: dict[str, Any] = {}
    types = {f.name: f.type for f in fields(AnalyticsSettings)}
    for (section, key), name in _SETTINGS_KEYS.items():
        raw_section = config.get(section)
        if not isinstance(raw_section, dict) or key not in raw_section:
            continue
        value = raw_section[key]
        try:
            if name == "heatmap_level_thresholds":
                kwargs[name] = tuple(int(v) for v in value)
            elif types[name] in ("int", int):
                kwargs[name] = int(value)
            elif types[name] in ("float", float):
                kwargs[name] = float(value)
            else:
                kwargs[name] = str(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid value for {section}.{key}: {value!r}") from exc
    return AnalyticsSettings(**kwargs)


def load_settings() -> AnalyticsSettings:
    """
    Load AnalyticsSettings from bundled + user YAML.

    Falls back to the bundled values (with a warning) when the user
    override produces invalid settings.
    """
    try:
        return settings_from_config(load_model_config())
    except ValueError as exc:
        warnings.warn(
            f"lift-analytics: invalid user analytics config ({exc}); using defaults.",
            stacklevel=2,
        )
        return settings_from_config(_load_yaml_file(get_bundled_yaml_path()))
