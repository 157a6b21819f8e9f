"""Factory functions for creating test data.

This module provides factory functions for:
- SQLAlchemy ORM models (User, Review)
- Pydantic schemas (ReviewPayload, GitHub API responses)

Design principles:
- Factories provide sensible defaults that can be overridden
- Model factories add to session but don't flush (tests control flush timing)
- Schema factories return dicts suitable for Pydantic model instantiation
"""

from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from reviewmate.db.models import Priority, Review, ReviewStatus, User
from reviewmate.schemas.github_api import GitHubPullRequest
from reviewmate.schemas.review import ReviewPayload

# Import test timeline constants
from tests.conftest import JAN_15, JAN_15_ISO, JAN_16_ISO

PR_URL = "https://github.com/octocat/Hello-World/pull/1347"
IDENTIFIER = "octocat/Hello-World#1347"


# -----------------------------------------------------------------------------
# Model Factories
# -----------------------------------------------------------------------------
def make_user(
    session: AsyncSession,
    *,
    email: str = "dev@example.com",
    github_token_encrypted: str | None = None,
    **overrides: Any,
) -> User:
    """Create a User model instance.

    Args:
        session: Async database session (model will be added but not flushed)
        email: Email address
        github_token_encrypted: Vault blob for the user's GitHub token
        **overrides: Additional field overrides

    Returns:
        User instance (added to session, not flushed)
    """
    user = User(email=email, github_token_encrypted=github_token_encrypted, **overrides)
    session.add(user)
    return user


def make_review(
    session: AsyncSession,
    user: User,
    *,
    owner: str = "octocat",
    repo: str = "Hello-World",
    number: int = 1347,
    author: str = "octocat",
    title: str | None = None,
    additions: int = 10,
    deletions: int = 2,
    files_changed: int = 1,
    status: ReviewStatus = ReviewStatus.OPEN,
    priority: Priority | None = None,
    opened_at: datetime | None = None,
    **overrides: Any,
) -> Review:
    """Create a Review model instance.

    Args:
        session: Async database session (model will be added but not flushed)
        user: Owning user (must have an ID)
        owner: Repository owner
        repo: Repository name
        number: PR number
        author: PR author login
        title: PR title (defaults to "Review #{number}")
        additions: Lines added
        deletions: Lines deleted
        files_changed: Files changed
        status: Review status
        priority: Priority tier (defaults to Low)
        opened_at: When the PR was opened (defaults to JAN_15, naive UTC)
        **overrides: Additional field overrides

    Returns:
        Review instance (added to session, not flushed)
    """
    review = Review(
        user_id=user.id,
        identifier=f"{owner}/{repo}#{number}",
        author=author,
        title=title or f"Review #{number}",
        description="",
        additions=additions,
        deletions=deletions,
        files_changed=files_changed,
        lines_changed=additions + deletions,
        priority=priority or Priority.LOW,
        status=status,
        last_status_notified=status,
        repository=f"{owner}/{repo}",
        pr_number=number,
        pr_url=f"https://github.com/{owner}/{repo}/pull/{number}",
        opened_at=opened_at or JAN_15.replace(tzinfo=None),
        **overrides,
    )
    session.add(review)
    return review


# -----------------------------------------------------------------------------
# Schema Factories
# -----------------------------------------------------------------------------
def make_payload(**overrides: Any) -> ReviewPayload:
    """Create a valid ReviewPayload for octocat/Hello-World#1347."""
    data: dict[str, Any] = {
        "identifier": IDENTIFIER,
        "author": "octocat",
        "title": "Amazing new feature",
        "description": "Please pull these awesome changes",
        "additions": 200,
        "deletions": 50,
        "files_changed": 5,
        "lines_changed": 250,
        "priority": Priority.HIGH,
        "status": ReviewStatus.OPEN,
        "repository": "octocat/Hello-World",
        "pr_number": 1347,
        "pr_url": PR_URL,
        "opened_at": JAN_15,
    }
    data.update(overrides)
    return ReviewPayload(**data)


def make_github_user(
    *,
    login: str = "octocat",
    user_id: int = 1,
    user_type: str = "User",
) -> dict[str, Any]:
    """Create a GitHub user API response dict."""
    return {
        "login": login,
        "id": user_id,
        "type": user_type,
    }


def make_github_pr(
    *,
    number: int = 1347,
    owner: str = "octocat",
    repo: str = "Hello-World",
    state: str = "open",
    title: str | None = "Amazing new feature",
    body: str | None = "Please pull these awesome changes",
    user: dict[str, Any] | None = None,
    created_at: str = JAN_15_ISO,
    updated_at: str = JAN_16_ISO,
    closed_at: str | None = None,
    merged_at: str | None = None,
    additions: int | None = 200,
    deletions: int | None = 50,
    changed_files: int | None = 5,
) -> dict[str, Any]:
    """Create a GitHub PR API response dict.

    This matches the structure returned by:
    GET /repos/{owner}/{repo}/pulls/{number}
    """
    return {
        "number": number,
        "html_url": f"https://github.com/{owner}/{repo}/pull/{number}",
        "state": state,
        "title": title,
        "body": body,
        "user": user or make_github_user(),
        "created_at": created_at,
        "updated_at": updated_at,
        "closed_at": closed_at,
        "merged_at": merged_at,
        "additions": additions,
        "deletions": deletions,
        "changed_files": changed_files,
    }


def make_merged_github_pr(**overrides: Any) -> dict[str, Any]:
    """Create a merged GitHub PR API response dict."""
    data: dict[str, Any] = {
        "state": "closed",
        "closed_at": JAN_16_ISO,
        "merged_at": JAN_16_ISO,
    }
    data.update(overrides)
    return make_github_pr(**data)


def parse_github_pr(**overrides: Any) -> GitHubPullRequest:
    """Create a validated GitHubPullRequest."""
    return GitHubPullRequest.model_validate(make_github_pr(**overrides))
