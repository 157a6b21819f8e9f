"""Pydantic schemas for the Review model."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from reviewmate.config import PriorityConfig
from reviewmate.db.models import Priority, ReviewStatus

from .base import SchemaBase
from .enums import ReviewSortField, SortDirection


def derive_priority(lines_changed: int, config: PriorityConfig | None = None) -> Priority:
    """Map a changed-line total to a priority tier.

    Boundaries are inclusive: a total exactly at a threshold takes the
    higher tier.

    Args:
        lines_changed: Additions plus deletions
        config: Thresholds to apply (defaults: High >= 200, Medium >= 50)

    Returns:
        Priority tier

    Raises:
        ValueError: If lines_changed is negative
    """
    if lines_changed < 0:
        raise ValueError(f"lines_changed must be non-negative, got {lines_changed}")

    thresholds = config or PriorityConfig()
    if lines_changed >= thresholds.high_threshold:
        return Priority.HIGH
    if lines_changed >= thresholds.medium_threshold:
        return Priority.MEDIUM
    return Priority.LOW


class ReviewPayload(SchemaBase):
    """Every field written to a review on create or full overwrite.

    Validated before any store write, independently of the ORM model.
    """

    identifier: str = Field(min_length=1, max_length=300, description="owner/repo#number")
    author: str = Field(min_length=1, max_length=100, description="PR author's GitHub login")
    title: str = Field(min_length=1, max_length=500, description="PR title")
    description: str = Field(default="", description="PR body")
    additions: int = Field(default=0, ge=0, description="Lines added")
    deletions: int = Field(default=0, ge=0, description="Lines deleted")
    files_changed: int = Field(default=0, ge=0, description="Number of files changed")
    lines_changed: int = Field(default=0, ge=0, description="additions + deletions")
    priority: Priority = Field(description="Priority tier")
    status: ReviewStatus = Field(description="open, closed or merged")
    repository: str = Field(min_length=3, max_length=200, description="owner/repo")
    pr_number: int = Field(gt=0, description="PR number")
    pr_url: str = Field(min_length=1, max_length=500, description="PR URL as submitted")
    opened_at: datetime = Field(description="When the PR was opened on GitHub")

    @field_validator("opened_at")
    @classmethod
    def opened_at_naive_utc(cls, v: datetime) -> datetime:
        """Store timestamps as naive UTC, matching the database clock."""
        if v.tzinfo is not None:
            return v.astimezone(UTC).replace(tzinfo=None)
        return v

    @model_validator(mode="after")
    def check_lines_changed(self) -> "ReviewPayload":
        """lines_changed is always the sum of additions and deletions."""
        if self.lines_changed != self.additions + self.deletions:
            raise ValueError("lines_changed must equal additions + deletions")
        return self


class ReviewRead(SchemaBase):
    """Full schema for reading a review."""

    id: int
    user_id: int
    identifier: str

    author: str
    title: str
    description: str
    additions: int
    deletions: int
    files_changed: int
    repository: str
    pr_number: int
    pr_url: str
    opened_at: datetime

    lines_changed: int
    priority: Priority
    status: ReviewStatus
    last_status_notified: ReviewStatus | None

    created_at: datetime
    updated_at: datetime

    def to_event(self) -> dict[str, Any]:
        """JSON-ready payload for live events."""
        return self.model_dump(mode="json")


class ReviewFilters(BaseModel):
    """Equality filters and ordering for listing a user's reviews.

    The literal "all" means no filter, matching what clients send for an
    unselected dropdown.
    """

    status: ReviewStatus | None = None
    priority: Priority | None = None
    repository: str | None = None
    sort_by: ReviewSortField = ReviewSortField.DATE
    sort_dir: SortDirection = SortDirection.DESC

    @field_validator("status", "priority", "repository", mode="before")
    @classmethod
    def all_means_unfiltered(cls, v: Any) -> Any:
        """Treat empty strings and "all" as no filter."""
        if isinstance(v, str) and v.strip().lower() in ("", "all"):
            return None
        return v
