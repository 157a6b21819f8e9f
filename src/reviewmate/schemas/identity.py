"""Pull request identity: URL parsing and CSV extraction.

Single-PR fetches and batch imports share PR_URL_PATTERN so the two paths
always agree on what counts as a PR URL.
"""

import csv
import io
import re

from pydantic import BaseModel, ConfigDict, Field

from reviewmate.exceptions import InvalidCSVError, InvalidURLError

PR_URL_PATTERN = re.compile(r"github\.com/([^/]+)/([^/]+)/pull/([1-9]\d*)", re.IGNORECASE)


class PRIdentity(BaseModel):
    """Owner, repository and number naming one pull request."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(min_length=1, description="Repository owner (org or user)")
    repo: str = Field(min_length=1, description="Repository name")
    number: int = Field(gt=0, description="PR number")

    @property
    def repository(self) -> str:
        """Repository slug in owner/repo form."""
        return f"{self.owner}/{self.repo}"

    @property
    def identifier(self) -> str:
        """Canonical identifier in owner/repo#number form."""
        return f"{self.owner}/{self.repo}#{self.number}"


def is_pr_url(text: str) -> bool:
    """Check whether text contains a GitHub pull request URL."""
    return PR_URL_PATTERN.search(text) is not None


def parse_pr_url(url: str) -> PRIdentity:
    """Parse a GitHub pull request URL into its identity.

    Args:
        url: Free text containing github.com/<owner>/<repo>/pull/<number>

    Returns:
        PRIdentity for the first PR URL found

    Raises:
        InvalidURLError: If the text does not contain a PR URL
    """
    match = PR_URL_PATTERN.search(url.strip())
    if match is None:
        raise InvalidURLError()

    owner, repo, number = match.groups()
    return PRIdentity(owner=owner, repo=repo, number=int(number))


def extract_pr_urls(csv_text: str) -> list[str]:
    """Collect PR URLs from every cell of a CSV document, in order.

    Args:
        csv_text: Decoded CSV file contents

    Returns:
        Stripped cells that contain a PR URL (may be empty)

    Raises:
        InvalidCSVError: If the text cannot be parsed as CSV
    """
    try:
        rows = list(csv.reader(io.StringIO(csv_text), strict=True))
    except csv.Error as e:
        raise InvalidCSVError("Unable to parse CSV file") from e

    urls: list[str] = []
    for row in rows:
        for cell in row:
            value = cell.strip()
            if value and is_pr_url(value):
                urls.append(value)
    return urls
