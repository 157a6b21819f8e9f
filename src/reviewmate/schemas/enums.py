"""Enums for Pydantic schemas."""

from enum import Enum


class ReviewSortField(str, Enum):
    """Fields a review list can be sorted by."""

    DATE = "date"
    LINES = "lines"
    FILES = "files"


class SortDirection(str, Enum):
    """Sort direction for review lists."""

    ASC = "asc"
    DESC = "desc"
