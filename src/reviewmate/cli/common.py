"""Common CLI option factories and helpers.

This module centralizes reusable CLI options and provides:
- `run_async_command`: Unified async execution with error handling for CLI commands
- `open_container`: Service wiring scoped to one command
- `require_user`: Look up a user by email or exit
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Coroutine
from contextlib import asynccontextmanager
from typing import Annotated, TypeVar

import typer
from rich.console import Console
from sqlalchemy.ext.asyncio import AsyncSession

from reviewmate.db.models import User
from reviewmate.db.repositories import UserRepository
from reviewmate.github.sync.enums import OutputFormat
from reviewmate.web.container import ServiceContainer

# Shared console instance for CLI output
console = Console()

T = TypeVar("T")


def run_async_command(
    coro: Coroutine[object, object, T],
    *,
    error_prefix: str = "Error",
) -> T:
    """Execute async code from synchronous CLI command with unified error handling.

    Uses asyncio.run() for clean event loop management. Catches exceptions,
    prints user-friendly error messages, and exits with code 1.

    Args:
        coro: Async coroutine to execute
        error_prefix: Prefix for error messages (default: "Error")

    Returns:
        Result from the coroutine

    Raises:
        typer.Exit: Re-raised from deliberate exits, or raised with code 1 on error
    """
    try:
        return asyncio.run(coro)
    except typer.Exit:
        # Re-raise deliberate exits (e.g., from validation helpers)
        raise
    except Exception as e:
        console.print(f"[red]{error_prefix}:[/red] {e}")
        raise typer.Exit(1) from None


@asynccontextmanager
async def open_container() -> AsyncIterator[ServiceContainer]:
    """Build services for one command and release them afterwards."""
    container = ServiceContainer.build()
    try:
        yield container
    finally:
        await container.close()


async def require_user(session: AsyncSession, email: str) -> User:
    """Get a user by email.

    Raises:
        typer.Exit(1): If no such user exists
    """
    user = await UserRepository(session).get_by_email(email)
    if user is None:
        console.print(f"[red]Error:[/red] No user with email {email}")
        raise typer.Exit(1)
    return user


# Typer requires function calls as default arguments, which triggers B008.
# Using Annotated with a centralized type alias keeps the noqa in one place.

OutputFormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format",
    ),
]
"""Output format option type for CLI commands.

Usage:
    def command(output_format: OutputFormatOption = OutputFormat.TEXT):
"""

EmailArgument = Annotated[
    str,
    typer.Argument(
        help="Email address of the ReviewMate user",
    ),
]
"""Required positional user email argument."""

GitHubTokenOption = Annotated[
    str | None,
    typer.Option(
        "--github-token",
        "-t",
        help="GitHub personal access token (stored encrypted)",
    ),
]
"""Optional GitHub token option."""
