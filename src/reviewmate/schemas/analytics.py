"""Pydantic schemas for the per-user analytics summary."""

from pydantic import BaseModel, Field


class RepositoryActivity(BaseModel):
    """Number of tracked reviews in one repository."""

    repo: str
    count: int


class ContributorActivity(BaseModel):
    """Number of tracked reviews authored by one GitHub user."""

    author: str
    count: int


class AnalyticsSummary(BaseModel):
    """Aggregate view over all reviews a user tracks."""

    status_counts: dict[str, int] = Field(
        default_factory=lambda: {"open": 0, "closed": 0, "merged": 0},
        description="Reviews per status (every status present, zero when unused)",
    )
    average_review_time_hours: float = Field(
        default=0.0,
        description="Mean hours from PR open to last update for closed and merged reviews",
    )
    repository_activity: list[RepositoryActivity] = Field(
        default_factory=list, description="Top 5 repositories by review count"
    )
    top_contributors: list[ContributorActivity] = Field(
        default_factory=list, description="Top 5 authors by review count"
    )
