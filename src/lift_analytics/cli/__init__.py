"""Command-line interface for lift-analytics."""
