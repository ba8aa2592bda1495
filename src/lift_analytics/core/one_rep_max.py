"""
One-rep max estimation (Epley).

    1RM = weight * (1 + reps / 30)

Valid for 1..15 reps.  Above 15 reps the estimate is too unreliable to
chart, so the estimator returns None and callers drop the set from any
1RM series (it still counts toward set totals and volume).
"""

from typing import Iterable

from .config import EPLEY_DIVISOR, ONE_REP_MAX_MAX_REPS, ONE_REP_MAX_MIN_REPS
from .models import WorkoutSet


def estimate_one_rep_max(weight: float, reps: int) -> float | None:
    """
    Estimate a one-rep max with the Epley formula.

    Args:
        weight: Weight lifted (kg)
        reps: Repetitions performed

    Returns:
        Estimated 1RM in kg, or None when weight <= 0 or reps is outside 1..15
    """
    if weight <= 0:
        return None
    if reps < ONE_REP_MAX_MIN_REPS or reps > ONE_REP_MAX_MAX_REPS:
        return None
    return weight * (1 + reps / EPLEY_DIVISOR)


def set_one_rep_max(workout_set: WorkoutSet) -> float | None:
    """Estimated 1RM of a logged set (see estimate_one_rep_max)."""
    return estimate_one_rep_max(workout_set.weight, workout_set.reps)


def best_set(sets: Iterable[WorkoutSet]) -> WorkoutSet | None:
    """
    Pick the set with the highest estimated 1RM.

    Ties are broken by higher weight, then more reps; the first set wins a
    full tie.  Sets without a reliable estimate are never chosen.

    Args:
        sets: Sets of one exercise

    Returns:
        Best set, or None if no set has an estimate
    """
    best: WorkoutSet | None = None
    best_key: tuple[float, float, int] | None = None

    for s in sets:
        est = set_one_rep_max(s)
        if est is None:
            continue
        key = (est, s.weight, s.reps)
        if best_key is None or key > best_key:
            best, best_key = s, key

    return best
