"""Aggregate statistics over a user's tracked reviews."""

from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime

from reviewmate.db.models import Review, ReviewStatus
from reviewmate.schemas.analytics import (
    AnalyticsSummary,
    ContributorActivity,
    RepositoryActivity,
)

TOP_N = 5


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def _hours_between(start: datetime, end: datetime) -> float:
    return (_naive_utc(end) - _naive_utc(start)).total_seconds() / 3600


def build_analytics(reviews: Sequence[Review]) -> AnalyticsSummary:
    """Summarize reviews by status, review time, repository and author.

    Args:
        reviews: Every review of one user

    Returns:
        AnalyticsSummary; empty input yields zero counts and empty rankings
    """
    status_counts = {status.value: 0 for status in ReviewStatus}
    for review in reviews:
        status_counts[review.status.value] += 1

    finished = [r for r in reviews if r.status in (ReviewStatus.CLOSED, ReviewStatus.MERGED)]
    average = 0.0
    if finished:
        total_hours = sum(_hours_between(r.opened_at, r.updated_at) for r in finished)
        average = round(total_hours / len(finished), 2)

    repositories = Counter(r.repository for r in reviews)
    authors = Counter(r.author for r in reviews)

    return AnalyticsSummary(
        status_counts=status_counts,
        average_review_time_hours=average,
        repository_activity=[
            RepositoryActivity(repo=repo, count=count)
            for repo, count in repositories.most_common(TOP_N)
        ],
        top_contributors=[
            ContributorActivity(author=author, count=count)
            for author, count in authors.most_common(TOP_N)
        ],
    )
