"""Whole-history commands: muscles, heatmap, compare."""

import json
from datetime import tzinfo
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.comparison import compare_periods
from ...core.dates import today_local, workout_date
from ...core.heatmap import build_heatmap
from ...core.models import DateRange, PeriodMetrics, PeriodSummary, Workout
from ...core.muscles import (
    AGGREGATION_MODES,
    aggregate_by_muscle,
    group_by_intensity,
    most_trained_muscle,
    muscle_intensities,
)
from ...core.periods import earliest_workout_day, filter_by_range, resolve_period
from ...core.volume import period_summary
from .. import views
from ..app import (
    DataPathOption,
    JsonOption,
    PeriodOption,
    TzOption,
    app,
    get_metadata,
    get_settings,
    load_workouts_or_exit,
    resolve_tz,
)


def _resolve_or_exit(period: str, workouts: list[Workout], tz: tzinfo | None) -> DateRange:
    """Resolve a preset name, printing the valid names and exiting on error."""
    try:
        return resolve_period(period, today_local(tz), earliest_workout_day(workouts, tz))
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def _range_dict(date_range: DateRange) -> dict:
    return {"start": date_range.start.isoformat(), "end": date_range.end.isoformat()}


def _summary_dict(summary: PeriodSummary, tz: tzinfo | None) -> dict:
    best = summary.best_workout
    return {
        "total_sets": summary.total_sets,
        "rest_days": summary.rest_days,
        "best_workout": (
            {
                "id": best.id,
                "date": workout_date(best, tz).isoformat(),
                "volume": best.total_volume,
            }
            if best is not None else None
        ),
        "volume_by_day": [
            {"date": d.date.isoformat(), "volume": d.volume, "workouts": d.workouts}
            for d in summary.volume_by_day
        ],
    }


def _metrics_dict(metrics: PeriodMetrics) -> dict:
    return {
        "volume": metrics.volume,
        "workouts": metrics.workouts,
        "avg_volume": round(metrics.avg_volume, 2),
    }


@app.command()
def muscles(
    data_path: DataPathOption = None,
    period: PeriodOption = None,
    mode: Annotated[
        str,
        typer.Option("--mode", "-m", help="Aggregate by 'sets' or 'volume'"),
    ] = "sets",
    metadata_path: Annotated[
        Optional[Path],
        typer.Option("--metadata", help="YAML/JSON file of extra exercise metadata"),
    ] = None,
    tz_name: TzOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show how training is distributed across primary muscle groups.
    """
    if mode not in AGGREGATION_MODES:
        views.print_error(f"Invalid mode: {mode}. Must be one of {', '.join(AGGREGATION_MODES)}")
        raise typer.Exit(1)

    tz = resolve_tz(tz_name)
    settings = get_settings()
    metadata = get_metadata(metadata_path)
    workouts = load_workouts_or_exit(data_path)

    date_range = _resolve_or_exit(period or settings.default_period, workouts, tz)
    shares = aggregate_by_muscle(filter_by_range(workouts, date_range, tz), metadata, mode)  # type: ignore[arg-type]
    intensities = muscle_intensities(shares)
    primary, secondary = group_by_intensity(intensities, settings.muscle_primary_fraction)

    if json_out:
        by_muscle = {i.muscle: i for i in intensities}
        print(json.dumps({
            "period": _range_dict(date_range),
            "mode": mode,
            "most_trained": most_trained_muscle(shares),
            "primary": primary,
            "secondary": secondary,
            "muscles": [
                {
                    "muscle": s.muscle,
                    "sets": s.sets,
                    "value": s.value,
                    "percentage": s.percentage,
                    "intensity": by_muscle[s.muscle].intensity,
                    "opacity": by_muscle[s.muscle].opacity,
                }
                for s in shares
            ],
        }, indent=2))
        return

    if not shares:
        views.print_info(f"No completed workouts in {views.format_range(date_range)}.")
        return

    views.console.print()
    views.console.print(views.format_muscle_table(shares, intensities, primary))
    views.console.print()
    views.print_muscle_chart(shares, mode)
    views.console.print()


@app.command()
def heatmap(
    data_path: DataPathOption = None,
    period: PeriodOption = None,
    tz_name: TzOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the workout contribution heatmap with streaks and weekly averages.
    """
    tz = resolve_tz(tz_name)
    settings = get_settings()
    workouts = load_workouts_or_exit(data_path)
    date_range = _resolve_or_exit(period or settings.default_period, workouts, tz)

    result = build_heatmap(
        workouts,
        date_range,
        today=today_local(tz),
        tz=tz,
        level_thresholds=settings.heatmap_level_thresholds,
        max_days=settings.heatmap_max_days,
    )

    if json_out:
        print(json.dumps({
            "period": _range_dict(result.period),
            "is_capped_to_year": result.is_capped_to_year,
            "total_weeks": result.total_weeks,
            "total_workouts": result.total_workouts,
            "average_workouts_per_week": result.average_workouts_per_week,
            "longest_streak": result.longest_streak,
            "current_streak": result.current_streak,
            "most_active_day": result.most_active_day,
            "legend_levels": result.legend_levels,
            "month_labels": [
                {"year": y, "month": m, "week": w} for y, m, w in result.month_labels
            ],
            "weeks": [
                [
                    {
                        "date": c.date.isoformat(),
                        "count": c.count,
                        "level": c.intensity_level,
                        "is_today": c.is_today,
                        "is_in_period": c.is_in_period,
                    }
                    for c in week
                ]
                for week in result.cells
            ],
        }, indent=2))
        return

    views.console.print()
    views.print_heatmap(result)
    views.console.print()


@app.command()
def compare(
    data_path: DataPathOption = None,
    period: PeriodOption = None,
    daily: Annotated[
        bool,
        typer.Option("--daily", help="Also draw the daily volume chart of the current period"),
    ] = False,
    tz_name: TzOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Compare volume and workout count with the preceding period.

    Also summarizes the current period: total sets, rest days, best workout.
    """
    tz = resolve_tz(tz_name)
    settings = get_settings()
    workouts = load_workouts_or_exit(data_path)

    try:
        current_range, prev_range, result = compare_periods(
            workouts, period or settings.default_period, today=today_local(tz), tz=tz
        )
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    summary = period_summary(workouts, current_range, tz)

    if json_out:
        print(json.dumps({
            "current_range": _range_dict(current_range),
            "previous_range": _range_dict(prev_range),
            "current_period": _metrics_dict(result.current_period),
            "previous_period": _metrics_dict(result.previous_period),
            "change": {
                "volume_percentage": result.change.volume_percentage,
                "workouts": result.change.workouts,
                "avg_volume_percentage": result.change.avg_volume_percentage,
            },
            "summary": _summary_dict(summary, tz),
        }, indent=2))
        return

    views.console.print()
    views.console.print(views.format_comparison_table(result, current_range, prev_range))
    views.console.print()
    views.console.print(views.format_period_summary(summary, tz))
    if daily:
        views.console.print()
        views.print_volume_chart(summary)
    views.console.print()
