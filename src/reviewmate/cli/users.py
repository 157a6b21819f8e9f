"""User provisioning commands."""

import typer

from reviewmate.auth.tokens import create_access_token
from reviewmate.cli.common import (
    EmailArgument,
    GitHubTokenOption,
    console,
    open_container,
    require_user,
    run_async_command,
)
from reviewmate.db.engine import session_scope
from reviewmate.db.repositories import UserRepository

app = typer.Typer(help="Manage ReviewMate users")


@app.command("create")
def create_user(email: EmailArgument, github_token: GitHubTokenOption = None) -> None:
    """Create a user and print an API access token.

    Examples:
        reviewmate users create dev@example.com --github-token ghp_xxx
    """

    async def _create() -> str:
        async with open_container() as container:
            blob = container.vault.encrypt(github_token.strip()) if github_token else None
            async with session_scope(container.session_factory) as session:
                repo = UserRepository(session)
                if await repo.get_by_email(email) is not None:
                    console.print(f"[red]Error:[/red] User {email} already exists")
                    raise typer.Exit(1)
                user = await repo.create(email, blob)
            return create_access_token(user.id, user.email, container.settings)

    token = run_async_command(_create(), error_prefix="Failed to create user")
    console.print(f"[green]Created user[/green] {email.strip().lower()}")
    console.print(f"Access token: {token}")


@app.command("token")
def issue_token(email: EmailArgument) -> None:
    """Issue a fresh API access token for an existing user.

    Examples:
        reviewmate users token dev@example.com
    """

    async def _issue() -> str:
        async with open_container() as container:
            async with session_scope(container.session_factory) as session:
                user = await require_user(session, email)
            return create_access_token(user.id, user.email, container.settings)

    token = run_async_command(_issue(), error_prefix="Failed to issue token")
    console.print(token)
