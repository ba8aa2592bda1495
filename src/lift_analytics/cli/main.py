"""
CLI entry point using Typer.

Provides read-only analytics commands over a workout export:
- one-rm: Estimate a 1RM from weight x reps
- history: Per-exercise session history (optionally plotted)
- trend: Estimated-1RM trend classification
- stats: Personal record and averages for an exercise
- muscles: Muscle group distribution
- heatmap: Contribution heatmap with streaks
- compare: Period-over-period comparison
"""

from . import commands  # noqa: F401  (registers commands on app)
from .app import app

if __name__ == "__main__":
    app()
