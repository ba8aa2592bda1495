"""
lift-analytics: analytics engine for strength-training logs.

Estimates one-rep maxes, builds per-exercise histories and trends,
aggregates muscle-group distribution, and renders activity heatmaps and
period comparisons from completed workouts.
"""

from .core.comparison import compare, compare_periods, percentage_change
from .core.heatmap import build_heatmap
from .core.history import build_history, exercise_stats, find_best_pr, one_rep_max_series
from .core.models import (
    DateRange,
    ExerciseEntry,
    ExerciseMetadata,
    Workout,
    WorkoutSet,
)
from .core.muscles import aggregate_by_muscle, group_by_intensity, muscle_intensities
from .core.one_rep_max import estimate_one_rep_max
from .core.periods import previous_range, resolve_period
from .core.streaks import current_streak, longest_streak
from .core.trend import classify_trend
from .core.volume import period_summary, volume_by_day

__version__ = "0.1.0"

__all__ = [
    "DateRange",
    "ExerciseEntry",
    "ExerciseMetadata",
    "Workout",
    "WorkoutSet",
    "aggregate_by_muscle",
    "build_heatmap",
    "build_history",
    "classify_trend",
    "compare",
    "compare_periods",
    "current_streak",
    "estimate_one_rep_max",
    "exercise_stats",
    "find_best_pr",
    "group_by_intensity",
    "longest_streak",
    "muscle_intensities",
    "one_rep_max_series",
    "period_summary",
    "percentage_change",
    "previous_range",
    "resolve_period",
    "volume_by_day",
]
