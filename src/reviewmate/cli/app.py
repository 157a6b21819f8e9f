"""Main CLI application for ReviewMate."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from reviewmate import __version__
from reviewmate.cli import digest as digest_cmd
from reviewmate.cli import reviews as reviews_cmd
from reviewmate.cli import users as users_cmd
from reviewmate.cli.common import run_async_command
from reviewmate.config import get_settings
from reviewmate.db.engine import build_engine, create_tables
from reviewmate.logging import setup_logging

app = typer.Typer(
    name="reviewmate",
    help="Track GitHub pull requests you review, with live updates and status emails.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"reviewmate version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-error output (WARNING level).",
        ),
    ] = False,
) -> None:
    """ReviewMate - Track the pull requests you review."""
    settings = get_settings()
    log_config = settings.logging

    # Setup logging with CLI overrides
    setup_logging(
        level=settings.log_level,
        verbose=verbose,
        quiet=quiet,
        log_file=Path(log_config.log_file) if log_config.log_file else None,
        rotation=log_config.rotation,
        retention=log_config.retention,
        serialize=log_config.serialize,
    )


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default from settings)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (default from settings)"),
) -> None:
    """Run the HTTP API server."""
    from reviewmate.web.server import run_server

    run_server(host=host, port=port)


@app.command("init-db")
def init_db() -> None:
    """Create database tables (development; use Alembic in production)."""

    async def _init() -> None:
        engine = build_engine(get_settings().database_url)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    run_async_command(_init(), error_prefix="Database setup failed")
    console.print("[green]Database tables created.[/green]")


# Register subcommands
app.add_typer(users_cmd.app, name="users")
app.add_typer(reviews_cmd.app, name="reviews")
app.add_typer(digest_cmd.app, name="digest")


if __name__ == "__main__":
    app()
