"""Pydantic schemas for parsing GitHub API responses.

These schemas map directly to the GitHub REST API response structure.
See: https://docs.github.com/en/rest/pulls/pulls
"""

from datetime import datetime

from pydantic import BaseModel, Field

from reviewmate.config import PriorityConfig
from reviewmate.db.models import ReviewStatus

from .identity import PRIdentity
from .review import ReviewPayload, derive_priority


class GitHubUser(BaseModel):
    """GitHub user object from API responses."""

    login: str = Field(description="GitHub username")
    id: int = Field(description="GitHub user ID")
    type: str = Field(default="User", description="User type")


class GitHubPullRequest(BaseModel):
    """GitHub Pull Request object from API.

    Maps to: GET /repos/{owner}/{repo}/pulls/{number}
    """

    # Basic info
    number: int = Field(description="PR number")
    html_url: str = Field(description="GitHub PR URL")
    state: str = Field(description="PR state (open, closed)")
    title: str | None = Field(default=None, description="PR title")
    body: str | None = Field(default=None, description="PR description")

    # User info
    user: GitHubUser | None = Field(default=None, description="PR author")

    # Dates
    created_at: datetime = Field(description="When PR was created")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")
    closed_at: datetime | None = Field(default=None, description="When PR was closed")
    merged_at: datetime | None = Field(default=None, description="When PR was merged")

    # Stats (null on some partial payloads)
    additions: int | None = Field(default=0, description="Lines added")
    deletions: int | None = Field(default=0, description="Lines deleted")
    changed_files: int | None = Field(default=0, description="Number of files changed")

    @property
    def status(self) -> ReviewStatus:
        """Derive tracked status: a merge timestamp wins over the close state."""
        if self.merged_at is not None:
            return ReviewStatus.MERGED
        if self.state == "closed":
            return ReviewStatus.CLOSED
        return ReviewStatus.OPEN

    def to_review_payload(
        self,
        identity: PRIdentity,
        pr_url: str,
        priority_config: PriorityConfig | None = None,
    ) -> ReviewPayload:
        """
        Factory method to convert to the full review write payload.

        Args:
            identity: Identity parsed from the submitted URL
            pr_url: The URL as submitted, stored only when GitHub omits html_url
            priority_config: Thresholds for priority derivation

        Returns:
            ReviewPayload with mirrored and derived fields
        """
        additions = self.additions or 0
        deletions = self.deletions or 0
        lines_changed = additions + deletions

        return ReviewPayload(
            identifier=identity.identifier,
            author=self.user.login if self.user else "unknown",
            title=(self.title or "").strip() or "Untitled PR",
            description=self.body or "",
            additions=additions,
            deletions=deletions,
            files_changed=self.changed_files or 0,
            lines_changed=lines_changed,
            priority=derive_priority(lines_changed, priority_config),
            status=self.status,
            repository=identity.repository,
            pr_number=identity.number,
            pr_url=self.html_url.strip() or pr_url.strip(),
            opened_at=self.created_at,
        )
