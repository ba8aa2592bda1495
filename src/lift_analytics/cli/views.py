"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of analytics results.
"""

from datetime import tzinfo

from rich.console import Console
from rich.table import Table

from ..core.ascii_plot import (
    create_heatmap_grid,
    create_muscle_chart,
    create_one_rep_max_plot,
    create_volume_chart,
)
from ..core.dates import workout_date
from ..core.models import (
    DateRange,
    ExerciseStats,
    Heatmap,
    HistoryPoint,
    MuscleIntensity,
    MuscleShare,
    PeriodComparison,
    PeriodSummary,
    TrendResult,
)
from ..core.one_rep_max import set_one_rep_max
from ..core.trend import progress_status

console = Console()


def _fmt_weight(value: float | None) -> str:
    return f"{value:.1f}" if value is not None else "-"


def _fmt_signed(value: float, suffix: str = "") -> str:
    return f"{value:+g}{suffix}"


def format_range(date_range: DateRange) -> str:
    """Render an inclusive date range as 'YYYY-MM-DD .. YYYY-MM-DD'."""
    return f"{date_range.start.isoformat()} .. {date_range.end.isoformat()}"


def format_history_table(history: list[HistoryPoint], exercise_name: str) -> Table:
    """
    Create a Rich table with one row per session of an exercise.

    Args:
        history: Chronological history points
        exercise_name: Display name for the title

    Returns:
        Rich Table object
    """
    table = Table(title=f"History: {exercise_name}")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Date", style="cyan")
    table.add_column("Sets", justify="right")
    table.add_column("Best set", style="green")
    table.add_column("Est. 1RM", justify="right", style="bold")
    table.add_column("Volume", justify="right")

    for i, point in enumerate(history, 1):
        best = point.best_set
        table.add_row(
            str(i),
            point.date.strftime("%Y-%m-%d %H:%M"),
            str(len(point.sets)),
            f"{best.weight:g} x {best.reps}" if best is not None else "-",
            _fmt_weight(point.estimated_1rm),
            f"{sum(s.volume for s in point.sets):g}",
        )

    return table


def print_one_rep_max_plot(history: list[HistoryPoint], exercise_name: str) -> None:
    """Print the estimated-1RM ASCII plot."""
    console.print(create_one_rep_max_plot(history, exercise_name=exercise_name))


def format_trend_display(trend: TrendResult, exercise_name: str) -> str:
    """
    Format a trend classification as a text block with a colored badge.

    Args:
        trend: TrendResult to display
        exercise_name: Display name

    Returns:
        Formatted string (Rich markup)
    """
    badge = progress_status(trend)
    lines = [f"Trend: {exercise_name}"]
    lines.append(f"- Status:     [{badge['color']}]{badge['label']}[/{badge['color']}]")
    if trend.direction == "insufficient_data":
        lines.append("- Not enough sessions with an estimable 1RM yet.")
        return "\n".join(lines)
    lines.append(f"- Direction:  {trend.direction}")
    lines.append(f"- Change:     {_fmt_signed(trend.percentage, '%')}")
    lines.append(f"- Confidence: {trend.confidence:.1f}%")
    return "\n".join(lines)


def format_stats_display(stats: ExerciseStats, exercise_name: str) -> str:
    """
    Format exercise statistics as a text block.

    Args:
        stats: ExerciseStats to display
        exercise_name: Display name

    Returns:
        Formatted string
    """
    lines = [f"Stats: {exercise_name}"]
    if not stats.has_data:
        lines.append("- No completed sets recorded.")
        return "\n".join(lines)

    pr = stats.personal_record
    if pr is not None and stats.personal_record_date is not None:
        pr_1rm = set_one_rep_max(pr)
        est = f", est. 1RM {pr_1rm:.1f}" if pr_1rm is not None else ""
        lines.append(
            f"- PR:           {pr.weight:g} x {pr.reps}{est} "
            f"({stats.personal_record_date.strftime('%Y-%m-%d')})"
        )
    if stats.best_point is not None and stats.best_point.estimated_1rm is not None:
        lines.append(
            f"- Best 1RM:     {stats.best_point.estimated_1rm:.1f} "
            f"({stats.best_point.date.strftime('%Y-%m-%d')})"
        )
    lines.append(f"- Sessions:     {stats.times_performed}")
    lines.append(f"- Total sets:   {stats.total_sets}")
    lines.append(f"- Total volume: {stats.total_volume:g}")
    lines.append(f"- Avg weight:   {_fmt_weight(stats.average_weight)}")
    lines.append(f"- Avg reps:     {stats.average_reps}")
    if stats.average_rpe is not None:
        lines.append(f"- Avg RPE:      {stats.average_rpe:.1f}")
    if stats.last_performed is not None:
        lines.append(f"- Last done:    {stats.last_performed.strftime('%Y-%m-%d')}")
    return "\n".join(lines)


def format_muscle_table(
    shares: list[MuscleShare],
    intensities: list[MuscleIntensity],
    primary: list[str],
) -> Table:
    """
    Create a Rich table of the muscle distribution.

    Args:
        shares: Output of aggregate_by_muscle()
        intensities: Output of muscle_intensities() for the same shares
        primary: Muscles highlighted as primary

    Returns:
        Rich Table object
    """
    table = Table(title="Muscle Distribution")

    table.add_column("Muscle", style="cyan")
    table.add_column("Sets", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("Share", justify="right", style="bold")
    table.add_column("Intensity", justify="right")
    table.add_column("Group")

    by_muscle = {i.muscle: i for i in intensities}
    for share in shares:
        item = by_muscle[share.muscle]
        group = "[green]primary[/green]" if share.muscle in primary else "[dim]secondary[/dim]"
        table.add_row(
            share.muscle,
            str(share.sets),
            f"{share.value:g}",
            f"{share.percentage:.1f}%",
            f"{item.intensity:.2f}",
            group,
        )

    return table


def print_muscle_chart(shares: list[MuscleShare], mode: str) -> None:
    """Print the muscle distribution bar chart."""
    console.print(create_muscle_chart(shares, mode=mode))


def print_heatmap(heatmap: Heatmap) -> None:
    """Print the heatmap grid followed by its summary statistics."""
    console.print(f"Activity {format_range(heatmap.period)}")
    if heatmap.is_capped_to_year:
        print_warning("Period longer than a year; showing the most recent year.")
    console.print(create_heatmap_grid(heatmap), highlight=False)
    console.print()
    console.print(format_heatmap_summary(heatmap))


def format_heatmap_summary(heatmap: Heatmap) -> str:
    """Format heatmap statistics as a text block."""
    lines = ["Activity summary"]
    lines.append(f"- Workouts:        {heatmap.total_workouts}")
    lines.append(f"- Per week (avg):  {heatmap.average_workouts_per_week:.1f}")
    lines.append(f"- Current streak:  {heatmap.current_streak} day(s)")
    lines.append(f"- Best streak:     {heatmap.longest_streak} day(s)")
    lines.append(f"- Most active day: {heatmap.most_active_day or '-'}")
    return "\n".join(lines)


def format_comparison_table(
    comparison: PeriodComparison,
    current_range: DateRange,
    previous_range: DateRange,
) -> Table:
    """
    Create a Rich table comparing two periods.

    Args:
        comparison: Output of compare()
        current_range: Dates of the current period
        previous_range: Dates of the previous period

    Returns:
        Rich Table object
    """
    table = Table(title="Period Comparison")

    table.add_column("Metric", style="cyan")
    table.add_column(format_range(previous_range), justify="right")
    table.add_column(format_range(current_range), justify="right", style="bold")
    table.add_column("Change", justify="right")

    cur, prev, change = comparison.current_period, comparison.previous_period, comparison.change
    table.add_row(
        "Volume",
        f"{prev.volume:g}",
        f"{cur.volume:g}",
        _color_change(change.volume_percentage, _fmt_signed(change.volume_percentage, "%")),
    )
    table.add_row(
        "Workouts",
        str(prev.workouts),
        str(cur.workouts),
        _color_change(change.workouts, _fmt_signed(change.workouts)),
    )
    table.add_row(
        "Avg volume",
        f"{prev.avg_volume:.1f}",
        f"{cur.avg_volume:.1f}",
        _color_change(
            change.avg_volume_percentage, _fmt_signed(change.avg_volume_percentage, "%")
        ),
    )

    return table


def format_period_summary(summary: PeriodSummary, tz: tzinfo | None = None) -> str:
    """Format the descriptive totals of a period as a text block."""
    lines = [f"Period summary ({format_range(summary.period)})"]
    lines.append(f"- Total sets:   {summary.total_sets}")
    lines.append(f"- Rest days:    {summary.rest_days} of {summary.period.days}")
    best = summary.best_workout
    if best is None:
        lines.append("- Best workout: -")
    else:
        lines.append(
            f"- Best workout: {best.total_volume:g} volume "
            f"({workout_date(best, tz).isoformat()}, {best.id})"
        )
    return "\n".join(lines)


def print_volume_chart(summary: PeriodSummary) -> None:
    """Print the daily volume bar chart of a period."""
    console.print(create_volume_chart(summary.volume_by_day), highlight=False)


def _color_change(value: float, text: str) -> str:
    if value > 0:
        return f"[green]{text}[/green]"
    if value < 0:
        return f"[red]{text}[/red]"
    return text


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
