"""GitHub API client module.

This module provides:
- GitHubClient: Async client for single pull request metadata
- Typed remote failures: RemoteAPIError, RemoteProtocolError, RemoteUnavailableError
- Review sync: ReviewIngestionService, BatchImportCoordinator
"""

from .client import GitHubClient
from .exceptions import (
    GitHubClientError,
    RemoteAPIError,
    RemoteProtocolError,
    RemoteUnavailableError,
)

__all__ = [
    # Client
    "GitHubClient",
    # Exceptions
    "GitHubClientError",
    "RemoteAPIError",
    "RemoteProtocolError",
    "RemoteUnavailableError",
]
