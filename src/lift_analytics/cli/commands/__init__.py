"""CLI command modules; importing this package registers every command."""

from . import activity, exercises  # noqa: F401
