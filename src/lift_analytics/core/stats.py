"""
Small statistical helpers shared by the analytics modules.

All functions are pure and accept plain sequences of numbers.
"""

import math
from decimal import ROUND_FLOOR, Decimal
from typing import Sequence


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round with .5 going up (towards +inf), as the product's charts do.

    Python's built-in round() uses banker's rounding, which would make
    2.5 -> 2 and disagree with the displayed percentages.

    Args:
        value: Number to round
        ndigits: Decimal places to keep

    Returns:
        Rounded value
    """
    # Decimal(repr()) keeps the shortest decimal form, so 1.005 stays 1.005
    scaled = Decimal(repr(value)).scaleb(ndigits) + Decimal("0.5")
    return float(scaled.to_integral_value(rounding=ROUND_FLOOR).scaleb(-ndigits))


def round_half_away(value: float, ndigits: int = 0) -> float:
    """
    Round with .5 going away from zero, so round_half_away(-x) == -round_half_away(x).

    Used where a value and its negation must report the same magnitude.
    """
    magnitude = round_half_up(abs(value), ndigits)
    # Avoid -0.0 when a small negative value rounds to zero
    return -magnitude if value < 0 and magnitude else magnitude


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def population_std(values: Sequence[float]) -> float:
    """Population standard deviation; 0.0 for an empty sequence."""
    if not values:
        return 0.0
    m = mean(values)
    return math.sqrt(sum((v - m) ** 2 for v in values) / len(values))


def coefficient_of_variation(values: Sequence[float]) -> float:
    """
    Population std divided by |mean|.

    Returns 0.0 when the mean is zero (no meaningful spread ratio).
    """
    m = mean(values)
    if m == 0:
        return 0.0
    return population_std(values) / abs(m)


def linear_regression(
    points: Sequence[tuple[float, float]],
) -> tuple[float, float, float]:
    """
    Least-squares fit y = a + b*x.

    Args:
        points: (x, y) pairs

    Returns:
        Tuple (intercept a, slope b, r_squared)
    """
    n = len(points)
    if n < 2:
        if n == 1:
            return (float(points[0][1]), 0.0, 1.0)
        return (0.0, 0.0, 0.0)

    sum_x = sum(p[0] for p in points)
    sum_y = sum(p[1] for p in points)
    sum_xy = sum(p[0] * p[1] for p in points)
    sum_x2 = sum(p[0] ** 2 for p in points)

    denominator = n * sum_x2 - sum_x**2
    if abs(denominator) < 1e-10:
        return (sum_y / n, 0.0, 0.0)

    b = (n * sum_xy - sum_x * sum_y) / denominator
    a = (sum_y - b * sum_x) / n

    y_mean = sum_y / n
    ss_total = sum((p[1] - y_mean) ** 2 for p in points)
    ss_residual = sum((p[1] - (a + b * p[0])) ** 2 for p in points)
    r2 = 1.0 if ss_total == 0 else 1 - ss_residual / ss_total

    return (a, b, r2)
