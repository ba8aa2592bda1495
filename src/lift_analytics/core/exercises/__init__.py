"""
Exercise metadata catalogue for lift-analytics.

Maps exercise ids to their primary muscle group and equipment.
"""

from .registry import get_metadata, get_metadata_catalog, reset_catalog

__all__ = [
    "get_metadata",
    "get_metadata_catalog",
    "reset_catalog",
]
