"""Pending-review digest commands."""

import typer

from reviewmate.cli.common import console, open_container, run_async_command
from reviewmate.notifications import DigestResult, NoOpNotifier, send_pending_digests

app = typer.Typer(help="Pending-review digest email")


@app.command("send")
def send_digest() -> None:
    """Email every user their open reviews.

    Intended to run from cron, e.g. daily at 09:00:
        0 9 * * * reviewmate digest send
    """

    async def _send() -> DigestResult | None:
        async with open_container() as container:
            if isinstance(container.notifier, NoOpNotifier):
                return None
            return await send_pending_digests(container.session_factory, container.notifier)

    result = run_async_command(_send(), error_prefix="Digest failed")
    if result is None:
        console.print("[yellow]SMTP is not configured; no digests sent.[/yellow]")
        return

    console.print(
        f"Digest sent to [bold]{result.sent}[/bold] of {result.users} user(s) "
        f"({result.skipped} with no open reviews, {result.failed} failed)"
    )
    if result.failed:
        raise typer.Exit(1)
