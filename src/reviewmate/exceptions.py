"""Domain exceptions for ReviewMate.

Every error that can reach an API caller carries the HTTP status it maps to,
so the transport layer never has to guess.
"""

from collections.abc import Iterable, Mapping
from typing import Any


class ReviewMateError(Exception):
    """Base exception for errors with a caller-facing status and message."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON error body returned by the API."""
        payload: dict[str, Any] = {"message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class InvalidURLError(ReviewMateError):
    """Raised when a string is not a GitHub pull request URL."""

    status_code = 400

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Invalid GitHub PR URL. Expected https://github.com/<owner>/<repo>/pull/<number>"
        )


class InvalidCSVError(ReviewMateError):
    """Raised when an uploaded batch file cannot be parsed as CSV."""

    status_code = 400


class NoValidURLsError(ReviewMateError):
    """Raised when a batch file contains no GitHub PR URLs."""

    status_code = 400

    def __init__(self, message: str = "No valid PR URLs found in CSV") -> None:
        super().__init__(message)


class MissingCredentialError(ReviewMateError):
    """Raised when no usable GitHub token is available for a user."""

    status_code = 400

    def __init__(self, message: str = "GitHub token not configured for this user") -> None:
        super().__init__(message)


class AuthenticationError(ReviewMateError):
    """Raised when an API caller cannot be identified."""

    status_code = 401


class ReviewNotFoundError(ReviewMateError):
    """Raised when a tracked review does not exist for the caller."""

    status_code = 404

    def __init__(self, identifier: str) -> None:
        super().__init__("Review not found")
        self.identifier = identifier


class StoreConflictError(ReviewMateError):
    """Raised when a write collides with the (identifier, user) unique key.

    The ingestion pipeline recovers from this internally; it is never
    returned to callers.
    """

    status_code = 409


class ReviewValidationError(ReviewMateError):
    """Raised when fetched PR data fails validation before being stored.

    details holds one {"field", "message"} entry per failing field.
    """

    status_code = 400


def field_errors(errors: Iterable[Mapping[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into {"field", "message"} details.

    Request-location prefixes ("body", "query") are dropped so the field
    reads the same whether it came from a request or a fetched payload.
    """
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
        details.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return details
