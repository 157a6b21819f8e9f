"""GitHub client exceptions."""

from reviewmate.exceptions import ReviewMateError


class GitHubClientError(ReviewMateError):
    """Base exception for GitHub client errors."""

    status_code = 502


class RemoteAPIError(GitHubClientError):
    """Raised when GitHub answers with a non-2xx status.

    The upstream status code and message are passed through to callers.
    """

    def __init__(self, status_code: int, message: str = "Unknown error") -> None:
        super().__init__(message, status_code=status_code)


class RemoteProtocolError(GitHubClientError):
    """Raised when a 2xx response body is not a pull request."""

    status_code = 502


class RemoteUnavailableError(GitHubClientError):
    """Raised when GitHub cannot be reached (timeout, DNS, connection).

    This is the only transient failure: ingestion keeps an existing
    record instead of failing.
    """

    status_code = 503
