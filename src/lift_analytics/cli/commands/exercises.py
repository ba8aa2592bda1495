"""Per-exercise commands: one-rm, history, trend, stats."""

import json
from typing import Annotated

import typer

from ...core.history import build_history, exercise_stats
from ...core.models import HistoryPoint, Workout, WorkoutSet
from ...core.one_rep_max import estimate_one_rep_max
from ...core.trend import classify_trend, progress_status
from .. import views
from ..app import (
    DataPathOption,
    JsonOption,
    TzOption,
    app,
    get_settings,
    load_workouts_or_exit,
    resolve_tz,
)

ExerciseArgument = Annotated[str, typer.Argument(help="Exercise ID, e.g. barbell-bench-press")]


def _exercise_name(workouts: list[Workout], exercise_id: str) -> str:
    """Most recently logged display name of an exercise, falling back to its id."""
    name = exercise_id
    for w in workouts:
        for entry in w.entries_for(exercise_id):
            name = entry.exercise_name or name
    return name


def _set_dict(s: WorkoutSet | None) -> dict | None:
    if s is None:
        return None
    return {"weight": s.weight, "reps": s.reps, "rpe": s.rpe, "type": s.set_type}


def _point_dict(p: HistoryPoint) -> dict:
    return {
        "date": p.date.isoformat(),
        "workout_id": p.workout_id,
        "sets": len(p.sets),
        "best_set": _set_dict(p.best_set),
        "estimated_1rm": round(p.estimated_1rm, 2) if p.estimated_1rm is not None else None,
    }


@app.command("one-rm")
def one_rm(
    weight: Annotated[float, typer.Argument(help="Weight lifted")],
    reps: Annotated[int, typer.Argument(help="Repetitions performed")],
    json_out: JsonOption = False,
) -> None:
    """
    Estimate a one-rep max from a single set (Epley formula).
    """
    estimate = estimate_one_rep_max(weight, reps)

    if json_out:
        print(json.dumps({
            "weight": weight,
            "reps": reps,
            "estimated_1rm": round(estimate, 2) if estimate is not None else None,
        }, indent=2))
        return

    if estimate is None:
        views.print_warning(
            f"No estimate for {weight:g} x {reps}: weight must be positive and reps 1-15."
        )
        return

    views.console.print(f"Estimated 1RM: [bold]{estimate:.1f}[/bold]  ({weight:g} x {reps})")


@app.command()
def history(
    exercise_id: ExerciseArgument,
    data_path: DataPathOption = None,
    tz_name: TzOption = None,
    plot: Annotated[
        bool,
        typer.Option("--plot", help="Also draw the estimated-1RM progress chart"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Show the session history of one exercise with its estimated 1RM.
    """
    tz = resolve_tz(tz_name)
    workouts = load_workouts_or_exit(data_path)
    points = build_history(workouts, exercise_id, tz)

    if json_out:
        print(json.dumps([_point_dict(p) for p in points], indent=2))
        return

    if not points:
        views.print_info(f"No completed sessions of '{exercise_id}' found.")
        return

    name = _exercise_name(workouts, exercise_id)
    views.console.print()
    views.console.print(views.format_history_table(points, name))
    if plot:
        views.console.print()
        views.print_one_rep_max_plot(points, name)
    views.console.print()


@app.command()
def trend(
    exercise_id: ExerciseArgument,
    data_path: DataPathOption = None,
    tz_name: TzOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Classify the estimated-1RM trend of one exercise (up / down / flat).
    """
    tz = resolve_tz(tz_name)
    settings = get_settings()
    workouts = load_workouts_or_exit(data_path)
    points = build_history(workouts, exercise_id, tz)

    result = classify_trend(
        points,
        min_points=settings.trend_min_points,
        up_threshold=settings.trend_up_threshold,
        down_threshold=settings.trend_down_threshold,
        full_confidence_points=settings.trend_full_confidence_points,
        cv_penalty=settings.trend_cv_penalty,
    )

    if json_out:
        print(json.dumps({
            "exercise_id": exercise_id,
            "direction": result.direction,
            "percentage": result.percentage,
            "confidence": result.confidence,
            "status": progress_status(result)["label"],
            "points": len([p for p in points if p.estimated_1rm is not None]),
        }, indent=2))
        return

    views.console.print()
    views.console.print(views.format_trend_display(result, _exercise_name(workouts, exercise_id)))
    views.console.print()


@app.command()
def stats(
    exercise_id: ExerciseArgument,
    data_path: DataPathOption = None,
    tz_name: TzOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show personal record, averages and totals for one exercise.
    """
    tz = resolve_tz(tz_name)
    workouts = load_workouts_or_exit(data_path)
    result = exercise_stats(workouts, exercise_id, tz)

    if json_out:
        best = result.best_point
        print(json.dumps({
            "exercise_id": exercise_id,
            "total_sets": result.total_sets,
            "total_volume": result.total_volume,
            "times_performed": result.times_performed,
            "personal_record": _set_dict(result.personal_record),
            "personal_record_date": (
                result.personal_record_date.isoformat()
                if result.personal_record_date is not None else None
            ),
            "best_estimated_1rm": (
                round(best.estimated_1rm, 2)
                if best is not None and best.estimated_1rm is not None else None
            ),
            "average_weight": result.average_weight,
            "average_reps": result.average_reps,
            "average_rpe": result.average_rpe,
            "last_performed": (
                result.last_performed.isoformat() if result.last_performed is not None else None
            ),
        }, indent=2))
        return

    views.console.print()
    views.console.print(views.format_stats_display(result, _exercise_name(workouts, exercise_id)))
    views.console.print()
