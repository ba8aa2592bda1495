"""
Configuration constants for the workout analytics engine.

All adjustable thresholds are centralized here for easy tuning.  The
bundled analytics.yaml mirrors these values and can be overridden per user
(see core/engine/config_loader.py).
"""

from dataclasses import dataclass, field
from typing import Final

# =============================================================================
# ONE-REP MAX (Epley)
# =============================================================================

EPLEY_DIVISOR: Final[float] = 30.0  # 1RM = weight * (1 + reps / 30)
ONE_REP_MAX_MIN_REPS: Final[int] = 1
ONE_REP_MAX_MAX_REPS: Final[int] = 15  # Estimate is unreliable above this

# =============================================================================
# SET VALIDATION
# =============================================================================

RPE_MIN: Final[float] = 1.0
RPE_MAX: Final[float] = 10.0
SET_TYPES: Final[tuple[str, ...]] = ("normal", "warmup", "dropset", "superset", "failure")
WORKOUT_STATUSES: Final[tuple[str, ...]] = ("active", "completed", "cancelled")

# =============================================================================
# TREND CLASSIFICATION
# =============================================================================

TREND_MIN_POINTS: Final[int] = 3  # Fewer usable points -> insufficient_data
TREND_UP_THRESHOLD: Final[float] = 2.0  # percentage > +2.0 -> "up"
TREND_DOWN_THRESHOLD: Final[float] = -2.0  # percentage < -2.0 -> "down"
TREND_FULL_CONFIDENCE_POINTS: Final[int] = 10  # Sample factor saturates here
TREND_CV_PENALTY: Final[float] = 100.0  # Weight of later-half CV^2 in confidence

# =============================================================================
# MUSCLE DISTRIBUTION
# =============================================================================

OTHER_MUSCLE: Final[str] = "other"  # Bucket for exercises without metadata
MUSCLE_OPACITY_MIN: Final[float] = 0.3  # Least-trained muscle stays visible
MUSCLE_OPACITY_MAX: Final[float] = 1.0
MUSCLE_PRIMARY_FRACTION: Final[float] = 0.6  # >= 60% of max -> primary highlight

# =============================================================================
# CONTRIBUTION HEATMAP
# =============================================================================

HEATMAP_MAX_DAYS: Final[int] = 365  # Longer periods are capped to the last year
HEATMAP_LEVEL_THRESHOLDS: Final[tuple[int, ...]] = (1, 2, 3)  # 0 / 1 / 2 / 3+
HEATMAP_MAX_LEVELS: Final[int] = 5

WEEKDAY_NAMES: Final[tuple[str, ...]] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# =============================================================================
# PERIODS
# =============================================================================

DEFAULT_PERIOD: Final[str] = "last_30_days"

ROLLING_PERIOD_DAYS: Final[dict[str, int]] = {
    "last_7_days": 7,
    "last_14_days": 14,
    "last_30_days": 30,
    "last_90_days": 90,
}

CALENDAR_PERIODS: Final[tuple[str, ...]] = (
    "this_week",
    "last_week",
    "this_month",
    "last_month",
    "this_year",
    "last_year",
)

ALL_TIME_PERIOD: Final[str] = "all_time"


@dataclass(frozen=True)
class AnalyticsSettings:
    """Tunable thresholds, defaulting to the module constants above."""

    trend_min_points: int = TREND_MIN_POINTS
    trend_up_threshold: float = TREND_UP_THRESHOLD
    trend_down_threshold: float = TREND_DOWN_THRESHOLD
    trend_full_confidence_points: int = TREND_FULL_CONFIDENCE_POINTS
    trend_cv_penalty: float = TREND_CV_PENALTY
    heatmap_max_days: int = HEATMAP_MAX_DAYS
    heatmap_level_thresholds: tuple[int, ...] = field(
        default=HEATMAP_LEVEL_THRESHOLDS
    )
    muscle_primary_fraction: float = MUSCLE_PRIMARY_FRACTION
    default_period: str = DEFAULT_PERIOD

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.trend_min_points < 2:
            raise ValueError("trend_min_points must be at least 2")
        if self.trend_down_threshold > self.trend_up_threshold:
            raise ValueError("trend_down_threshold must not exceed trend_up_threshold")
        if self.trend_full_confidence_points < 1:
            raise ValueError("trend_full_confidence_points must be positive")
        if self.trend_cv_penalty < 0:
            raise ValueError("trend_cv_penalty must be non-negative")
        if self.heatmap_max_days < 7:
            raise ValueError("heatmap_max_days must cover at least one week")
        validate_level_thresholds(self.heatmap_level_thresholds)
        if not 0 < self.muscle_primary_fraction <= 1:
            raise ValueError("muscle_primary_fraction must be in (0, 1]")


def validate_level_thresholds(thresholds: tuple[int, ...]) -> None:
    """
    Check heatmap intensity thresholds.

    Thresholds must be positive, strictly increasing, and at most
    HEATMAP_MAX_LEVELS long so that levels stay within 0..5.

    Raises:
        ValueError: If the thresholds are malformed
    """
    if not thresholds:
        raise ValueError("heatmap level thresholds must not be empty")
    if len(thresholds) > HEATMAP_MAX_LEVELS:
        raise ValueError(
            f"at most {HEATMAP_MAX_LEVELS} heatmap level thresholds allowed, "
            f"got {len(thresholds)}"
        )
    if thresholds[0] < 1:
        raise ValueError("heatmap level thresholds must start at 1 or higher")
    for low, high in zip(thresholds, thresholds[1:]):
        if high <= low:
            raise ValueError(
                f"heatmap level thresholds must be strictly increasing: {thresholds}"
            )
