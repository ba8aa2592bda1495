"""
Per-exercise history building and exercise statistics.

A history is one HistoryPoint per completed workout that contains the
exercise, in chronological order.  Sessions on the same day stay separate.
"""

from datetime import datetime, tzinfo
from typing import Iterable

from .dates import workout_datetime, workout_instant
from .models import ExerciseStats, HistoryPoint, Workout, WorkoutSet
from .one_rep_max import best_set, set_one_rep_max
from .stats import round_half_up


def _completed_with_exercise(
    workouts: Iterable[Workout],
    exercise_id: str,
) -> list[Workout]:
    return [w for w in workouts if w.is_completed and w.entries_for(exercise_id)]


def _sets_for(workout: Workout, exercise_id: str) -> tuple[WorkoutSet, ...]:
    # An exercise may be logged twice in one session; treat it as one entry
    sets: list[WorkoutSet] = []
    for entry in workout.entries_for(exercise_id):
        sets.extend(entry.sets)
    return tuple(sets)


def build_history(
    workouts: Iterable[Workout],
    exercise_id: str,
    tz: tzinfo | None = None,
) -> list[HistoryPoint]:
    """
    Build the chronological history of one exercise.

    Args:
        workouts: Workout snapshot (any status; only completed ones are used)
        exercise_id: Exercise to extract
        tz: Timezone for local dates (None = system local)

    Returns:
        HistoryPoints sorted ascending by completion time
    """
    matching = _completed_with_exercise(workouts, exercise_id)
    # Order by the absolute instant; stable, so equal timestamps keep input order
    ordered = sorted(matching, key=lambda w: workout_instant(w, tz))

    history: list[HistoryPoint] = []
    for workout in ordered:
        when = workout_datetime(workout, tz)
        sets = _sets_for(workout, exercise_id)
        top = best_set(sets)
        history.append(
            HistoryPoint(
                date=when,
                workout_id=workout.id,
                sets=sets,
                best_set=top,
                estimated_1rm=set_one_rep_max(top) if top is not None else None,
            )
        )
    return history


def one_rep_max_series(history: list[HistoryPoint]) -> list[tuple[datetime, float]]:
    """
    Chart series of estimated 1RM values.

    Points without an estimate are gaps and are left out, not plotted as 0.
    """
    return [(p.date, p.estimated_1rm) for p in history if p.estimated_1rm is not None]


def find_best_pr(history: list[HistoryPoint]) -> HistoryPoint | None:
    """
    Return the history point with the highest estimated 1RM.

    The earliest point wins a tie (the record was set first there).
    """
    best: HistoryPoint | None = None
    for point in history:
        if point.estimated_1rm is None:
            continue
        if best is None or point.estimated_1rm > best.estimated_1rm:  # type: ignore[operator]
            best = point
    return best


def exercise_stats(
    workouts: Iterable[Workout],
    exercise_id: str,
    tz: tzinfo | None = None,
) -> ExerciseStats:
    """
    Summarize every completed set of one exercise.

    Args:
        workouts: Workout snapshot
        exercise_id: Exercise to summarize
        tz: Timezone for local dates

    Returns:
        ExerciseStats; ExerciseStats.empty() when the exercise was never done
    """
    history = build_history(workouts, exercise_id, tz)
    dated_sets = [(p.date, s) for p in history for s in p.sets]
    if not dated_sets:
        return ExerciseStats.empty()

    all_sets = [s for _, s in dated_sets]

    # Heaviest set; earliest occurrence wins so the PR date is when it was set
    pr_date, pr_set = dated_sets[0]
    for when, s in dated_sets[1:]:
        if s.weight > pr_set.weight:
            pr_date, pr_set = when, s

    rpe_values = [s.rpe for s in all_sets if s.rpe is not None]
    average_rpe = (
        round_half_up(sum(rpe_values) / len(rpe_values), 1) if rpe_values else None
    )

    return ExerciseStats(
        total_sets=len(all_sets),
        total_volume=sum(s.volume for s in all_sets),
        times_performed=len([p for p in history if p.sets]),
        personal_record=pr_set,
        personal_record_date=pr_date,
        best_point=find_best_pr(history),
        average_weight=sum(s.weight for s in all_sets) / len(all_sets),
        average_reps=int(round_half_up(sum(s.reps for s in all_sets) / len(all_sets))),
        average_rpe=average_rpe,
        last_performed=dated_sets[-1][0],
    )
