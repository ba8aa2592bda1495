"""
ASCII rendering of analytics results.

Creates terminal-friendly views: an estimated-1RM progress plot, a
horizontal bar chart for muscle distribution and the contribution heatmap
grid.
"""

import calendar
from datetime import datetime

from .history import one_rep_max_series
from .models import DailyVolume, Heatmap, HistoryPoint, MuscleShare
from .stats import linear_regression

# One glyph per intensity level; levels beyond the table reuse the last glyph
HEATMAP_GLYPHS = ("·", "░", "▒", "▓", "█", "█")
OUT_OF_PERIOD_GLYPH = " "


def create_one_rep_max_plot(
    history: list[HistoryPoint],
    width: int = 60,
    height: int = 16,
    exercise_name: str = "",
    show_trend_line: bool = True,
) -> str:
    """
    Create an ASCII plot of estimated 1RM over time.

    Sessions without an estimate (no set within the rep range) are skipped.

    Args:
        history: Chronological history points
        width: Plot width in characters, including the y-axis labels
        height: Plot height in lines, including title and x-axis
        exercise_name: Display name shown in the title
        show_trend_line: Overlay a least-squares fit drawn with ·

    Returns:
        ASCII art string
    """
    points = one_rep_max_series(history)
    if not points:
        return "No sessions with an estimable 1RM yet."

    min_date = points[0][0]
    max_date = points[-1][0]
    date_range = (max_date - min_date).days or 1

    values = [v for _, v in points]
    y_min = max(0.0, min(values) * 0.95)
    y_max = max(values) * 1.05
    y_range = (y_max - y_min) or 1.0

    plot_width = width - 8  # room for "123.4 ┤"
    plot_height = height - 4  # title, rule, x-axis rule, date labels

    grid = [[" " for _ in range(plot_width)] for _ in range(plot_height)]

    def _grid_pos(day: datetime, value: float) -> tuple[int, int]:
        x = int(((day - min_date).days / date_range) * (plot_width - 1))
        y = int(((value - y_min) / y_range) * (plot_height - 1))
        return x, plot_height - 1 - y

    if show_trend_line and len(points) >= 2:
        a, b, _ = linear_regression([((d - min_date).days, v) for d, v in points])
        for x in range(plot_width):
            day_offset = x / (plot_width - 1) * date_range
            y_raw = (a + b * day_offset - y_min) / y_range
            y = plot_height - 1 - int(y_raw * (plot_height - 1))
            if 0 <= y < plot_height:
                grid[y][x] = "·"

    plot_points = [_grid_pos(d, v) for d, v in points]

    # Connect consecutive points with a horizontal run then a vertical step
    for (x1, y1), (x2, y2) in zip(plot_points, plot_points[1:]):
        for x in range(x1 + 1, x2):
            grid[y1][x] = "─"
        if y1 != y2:
            step = -1 if y2 < y1 else 1
            col = max(x1, x2 - 1)
            if col != x1:
                grid[y1][col] = "╯" if step == -1 else "╮"
            for r in range(y1 + step, y2, step):
                grid[r][col] = "│"

    for x, y in plot_points:
        grid[y][x] = "●"

    lines = []
    title = "Estimated 1RM Progress"
    lines.append(f"{title} ({exercise_name})" if exercise_name else title)
    lines.append("─" * width)

    for i, row in enumerate(grid):
        y_val = y_max - (i / (plot_height - 1)) * y_range if plot_height > 1 else y_max
        lines.append(f"{y_val:6.1f} ┤" + "".join(row))

    lines.append("─" * width)

    label_line = [" "] * plot_width
    mid_date = min_date + (max_date - min_date) / 2
    for x_pos, day in ((0, min_date), (plot_width // 2 - 3, mid_date), (plot_width - 6, max_date)):
        for j, c in enumerate(day.strftime("%b %d")):
            if 0 <= x_pos + j < plot_width:
                label_line[x_pos + j] = c
    lines.append(" " * 8 + "".join(label_line))

    legend = "● estimated 1RM"
    if show_trend_line and len(points) >= 2:
        legend += "   · linear trend"
    lines.append(legend)

    return "\n".join(lines)


def create_simple_bar_chart(
    labels: list[str],
    values: list[float],
    width: int = 40,
    title: str = "",
    suffixes: list[str] | None = None,
) -> str:
    """
    Create a simple horizontal bar chart.

    Args:
        labels: Labels for each bar
        values: Values for each bar
        width: Maximum bar width
        title: Chart title
        suffixes: Optional text printed after each bar instead of the value

    Returns:
        ASCII bar chart string
    """
    if not values:
        return "No data to display."

    max_val = max(values)
    max_label_len = max(len(label) for label in labels)

    lines = []

    if title:
        lines.append(title)
        lines.append("─" * (max_label_len + width + 5))

    for i, (label, value) in enumerate(zip(labels, values)):
        bar_len = int((value / max_val) * width) if max_val > 0 else 0
        bar = "█" * bar_len
        suffix = suffixes[i] if suffixes is not None else f"{value:.1f}"
        lines.append(f"{label:>{max_label_len}} │{bar} {suffix}")

    return "\n".join(lines)


def create_muscle_chart(shares: list[MuscleShare], width: int = 40, mode: str = "sets") -> str:
    """Bar chart of a muscle distribution, largest share first."""
    if not shares:
        return "No completed workouts in this period."
    return create_simple_bar_chart(
        [s.muscle for s in shares],
        [s.value for s in shares],
        width=width,
        title=f"Muscle Distribution (by {mode})",
        suffixes=[f"{s.percentage:.1f}%" for s in shares],
    )


def create_volume_chart(daily: list[DailyVolume], width: int = 40) -> str:
    """Bar chart of daily volume, one line per day, oldest first."""
    if not any(d.workouts for d in daily):
        return "No completed workouts in this period."
    return create_simple_bar_chart(
        [d.date.strftime("%a %m-%d") for d in daily],
        [d.volume for d in daily],
        width=width,
        title="Daily Volume",
        suffixes=[f"{d.volume:g}" if d.workouts else "" for d in daily],
    )


def create_heatmap_grid(heatmap: Heatmap) -> str:
    """
    Render a Heatmap as seven weekday rows by one column per week.

    Padding days outside the period are left blank; in-period days use
    HEATMAP_GLYPHS indexed by intensity level.  Month abbreviations are
    printed above the week in which each month starts.
    """
    n_weeks = heatmap.total_weeks
    header = [" "] * (n_weeks * 2)
    for _, month, week_index in heatmap.month_labels:
        abbr = calendar.month_abbr[month]
        pos = week_index * 2
        # Skip labels that would collide with the previous one
        if all(c == " " for c in header[max(0, pos - 1):pos + len(abbr)]):
            for j, c in enumerate(abbr):
                if pos + j < len(header):
                    header[pos + j] = c

    lines = ["    " + "".join(header).rstrip()]
    for weekday, name in enumerate(calendar.day_abbr):
        row = []
        for week in heatmap.cells:
            cell = week[weekday]
            if not cell.is_in_period:
                glyph = OUT_OF_PERIOD_GLYPH
            else:
                glyph = HEATMAP_GLYPHS[min(cell.intensity_level, len(HEATMAP_GLYPHS) - 1)]
            row.append(glyph)
        lines.append(f"{name[:3]:<3} " + " ".join(row))

    legend = " ".join(
        HEATMAP_GLYPHS[min(level, len(HEATMAP_GLYPHS) - 1)] for level in heatmap.legend_levels
    )
    lines.append(f"    Less {legend} More")
    return "\n".join(lines)
