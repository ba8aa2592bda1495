"""
Trend classification for per-exercise estimated-1RM histories.

The usable points (those with an estimate) are split into an earlier and a
later half; the later half takes the extra point on odd counts.  The trend
percentage is the change of the later mean over the earlier mean:

    pct = round_half_away((later_mean - earlier_mean) / |earlier_mean| * 100, 1)

    pct >  TREND_UP_THRESHOLD   -> "up"
    pct <  TREND_DOWN_THRESHOLD -> "down"
    otherwise                   -> "flat"

Confidence grows with the number of points and with the consistency of
the later half:

    sample      = min(1, n / TREND_FULL_CONFIDENCE_POINTS)
    consistency = 1 / (1 + TREND_CV_PENALTY * cv_later^2)
    confidence  = round(100 * sample * consistency, 1)
"""

from typing import Sequence

from .config import (
    TREND_CV_PENALTY,
    TREND_DOWN_THRESHOLD,
    TREND_FULL_CONFIDENCE_POINTS,
    TREND_MIN_POINTS,
    TREND_UP_THRESHOLD,
)
from .models import HistoryPoint, TrendResult
from .stats import coefficient_of_variation, mean, round_half_away, round_half_up

# Badge mapping used by the exercise progress table
PROGRESS_STATUS: dict[str, dict[str, str]] = {
    "up": {"label": "Progressing", "color": "green", "icon": "trending-up"},
    "down": {"label": "Regressing", "color": "red", "icon": "trending-down"},
    "flat": {"label": "Stalled", "color": "yellow", "icon": "minus"},
    "insufficient_data": {"label": "New", "color": "gray", "icon": "help-circle"},
}


def trend_confidence(
    n_points: int,
    later_half: Sequence[float],
    full_confidence_points: int = TREND_FULL_CONFIDENCE_POINTS,
    cv_penalty: float = TREND_CV_PENALTY,
) -> float:
    """
    Confidence score 0..100 for a classified trend.

    Non-decreasing in n_points, non-increasing in the spread of later_half.

    Args:
        n_points: Number of usable points
        later_half: Values of the later half
        full_confidence_points: Sample count at which the sample factor is 1
        cv_penalty: Weight of the squared coefficient of variation

    Returns:
        Confidence rounded to one decimal
    """
    if n_points <= 0:
        return 0.0
    sample = min(1.0, n_points / full_confidence_points)
    cv = coefficient_of_variation(later_half)
    consistency = 1.0 / (1.0 + cv_penalty * cv * cv)
    return max(0.0, min(100.0, round_half_up(100.0 * sample * consistency, 1)))


def classify_series(
    values: Sequence[float],
    min_points: int = TREND_MIN_POINTS,
    up_threshold: float = TREND_UP_THRESHOLD,
    down_threshold: float = TREND_DOWN_THRESHOLD,
    full_confidence_points: int = TREND_FULL_CONFIDENCE_POINTS,
    cv_penalty: float = TREND_CV_PENALTY,
) -> TrendResult:
    """
    Classify a chronological series of estimated-1RM values.

    Never raises: too few values or a zero earlier mean give
    insufficient_data with percentage 0.

    Args:
        values: Values in chronological order (gaps already removed)
        min_points: Minimum values required
        up_threshold: Percentage above which the trend is "up"
        down_threshold: Percentage below which the trend is "down"
        full_confidence_points: See trend_confidence()
        cv_penalty: See trend_confidence()

    Returns:
        TrendResult
    """
    n = len(values)
    if n < min_points:
        return TrendResult.insufficient()

    split = n // 2
    earlier = values[:split]
    later = values[split:]

    earlier_mean = mean(earlier)
    if earlier_mean == 0:
        return TrendResult.insufficient()
    later_mean = mean(later)

    percentage = round_half_away((later_mean - earlier_mean) / abs(earlier_mean) * 100, 1)

    if percentage > up_threshold:
        direction = "up"
    elif percentage < down_threshold:
        direction = "down"
    else:
        direction = "flat"

    return TrendResult(
        direction=direction,
        percentage=percentage,
        confidence=trend_confidence(n, later, full_confidence_points, cv_penalty),
    )


def classify_trend(
    history: Sequence[HistoryPoint],
    min_points: int = TREND_MIN_POINTS,
    up_threshold: float = TREND_UP_THRESHOLD,
    down_threshold: float = TREND_DOWN_THRESHOLD,
    full_confidence_points: int = TREND_FULL_CONFIDENCE_POINTS,
    cv_penalty: float = TREND_CV_PENALTY,
) -> TrendResult:
    """
    Classify the estimated-1RM trend of an exercise history.

    Points whose estimated_1rm is None are gaps and are skipped.
    """
    values = [p.estimated_1rm for p in history if p.estimated_1rm is not None]
    return classify_series(
        values,
        min_points=min_points,
        up_threshold=up_threshold,
        down_threshold=down_threshold,
        full_confidence_points=full_confidence_points,
        cv_penalty=cv_penalty,
    )


def progress_status(trend: TrendResult) -> dict[str, str]:
    """Return the label/color/icon badge for a trend direction."""
    return PROGRESS_STATUS.get(trend.direction, PROGRESS_STATUS["insufficient_data"])
