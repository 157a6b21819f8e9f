"""Enums for sync operations."""

from enum import Enum


class UpsertAction(str, Enum):
    """What an upsert did to the stored review."""

    CREATED = "created"
    """No record existed; one was created."""

    UPDATED = "updated"
    """An existing record was overwritten with fresh GitHub data."""

    UNCHANGED = "unchanged"
    """GitHub was unreachable; the existing record was returned untouched."""


class OutputFormat(str, Enum):
    """Output format for CLI commands."""

    TEXT = "text"
    """Human-readable text output."""

    JSON = "json"
    """Machine-readable JSON output."""
