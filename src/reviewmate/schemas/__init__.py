"""Pydantic schemas for ReviewMate.

This module provides input validation and output serialization models.
"""

from .analytics import AnalyticsSummary, ContributorActivity, RepositoryActivity
from .base import SchemaBase
from .batch import (
    BatchAccepted,
    BatchItemResult,
    BatchProgress,
    BatchStatus,
    ItemStatus,
)
from .enums import ReviewSortField, SortDirection
from .github_api import GitHubPullRequest, GitHubUser
from .identity import (
    PR_URL_PATTERN,
    PRIdentity,
    extract_pr_urls,
    is_pr_url,
    parse_pr_url,
)
from .review import ReviewFilters, ReviewPayload, ReviewRead, derive_priority

__all__ = [
    # Base
    "SchemaBase",
    # Enums
    "ReviewSortField",
    "SortDirection",
    # Identity
    "PR_URL_PATTERN",
    "PRIdentity",
    "extract_pr_urls",
    "is_pr_url",
    "parse_pr_url",
    # Review
    "ReviewFilters",
    "ReviewPayload",
    "ReviewRead",
    "derive_priority",
    # GitHub API
    "GitHubPullRequest",
    "GitHubUser",
    # Batch
    "BatchAccepted",
    "BatchItemResult",
    "BatchProgress",
    "BatchStatus",
    "ItemStatus",
    # Analytics
    "AnalyticsSummary",
    "ContributorActivity",
    "RepositoryActivity",
]
