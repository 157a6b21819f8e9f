"""Async GitHub API client wrapper using githubkit.

This module provides a typed async interface to the single GitHub REST
call ReviewMate makes: fetching one pull request's metadata.
"""

from __future__ import annotations

from typing import Any

from githubkit import GitHub
from githubkit.exception import RequestError, RequestFailed, RequestTimeout
from pydantic import ValidationError

from reviewmate.config import GitHubConfig, get_settings
from reviewmate.logging import get_logger
from reviewmate.schemas.github_api import GitHubPullRequest

from .exceptions import (
    RemoteAPIError,
    RemoteProtocolError,
    RemoteUnavailableError,
)

logger = get_logger(__name__)


class GitHubClient:
    """Async GitHub API client for PR metadata.

    Usage:
        async with GitHubClient(token) as client:
            pr = await client.get_pull_request("octocat", "Hello-World", 1347)
            print(pr.title)

    Or without context manager:
        client = GitHubClient(token)
        pr = await client.get_pull_request("octocat", "Hello-World", 1347)
        await client.close()
    """

    def __init__(self, token: str, config: GitHubConfig | None = None) -> None:
        """Initialize the GitHub client.

        Args:
            token: GitHub PAT of the user the call is made for
            config: Base URL, timeout and User-Agent. Defaults to settings.
        """
        self._token = token
        self._config = config or get_settings().github
        self._client: GitHub[Any] | None = None

    @property
    def _github(self) -> GitHub[Any]:
        """Get or create the githubkit client instance."""
        if self._client is None:
            options: dict[str, Any] = {
                "user_agent": self._config.user_agent,
                "timeout": self._config.request_timeout_seconds,
                "auto_retry": False,
            }
            if self._config.api_base_url:
                options["base_url"] = self._config.api_base_url
            self._client = GitHub(self._token, **options)
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            self._client = None

    async def __aenter__(self) -> GitHubClient:
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    # -------------------------------------------------------------------------
    # Pull Request Methods
    # -------------------------------------------------------------------------
    async def get_pull_request(
        self,
        owner: str,
        repo: str,
        number: int,
    ) -> GitHubPullRequest:
        """Get full details for a single pull request.

        Exactly one request is made; failures are never retried here.

        Args:
            owner: Repository owner
            repo: Repository name
            number: PR number

        Returns:
            GitHubPullRequest with stats (additions, deletions, changed_files)

        Raises:
            RemoteAPIError: GitHub returned a non-2xx status
            RemoteProtocolError: The response body is not a pull request
            RemoteUnavailableError: GitHub could not be reached in time
        """
        try:
            resp = await self._github.rest.pulls.async_get(
                owner=owner,
                repo=repo,
                pull_number=number,
            )
        except RequestFailed as e:
            raise self._handle_error(e) from e
        except RequestTimeout as e:
            logger.warning("GitHub request timed out", pr=f"{owner}/{repo}#{number}")
            raise RemoteUnavailableError("GitHub request timed out") from e
        except RequestError as e:
            logger.warning("GitHub unreachable: {}", e)
            raise RemoteUnavailableError("Unable to reach GitHub") from e

        try:
            return GitHubPullRequest.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise RemoteProtocolError("Unexpected response from GitHub") from e

    # -------------------------------------------------------------------------
    # Error Handling
    # -------------------------------------------------------------------------
    def _handle_error(self, error: RequestFailed) -> RemoteAPIError:
        """Convert a githubkit failure into RemoteAPIError with GitHub's message."""
        status = error.response.status_code
        message = "Unknown error"
        try:
            body = error.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            message = str(body["message"])

        logger.debug("GitHub API error ({}): {}", status, message)
        return RemoteAPIError(status, message)
