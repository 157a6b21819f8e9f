"""Review commands: fetch a PR and list tracked reviews."""

import json
from typing import Any

import typer
from rich.table import Table

from reviewmate.cli.common import (
    EmailArgument,
    GitHubTokenOption,
    OutputFormatOption,
    console,
    open_container,
    require_user,
    run_async_command,
)
from reviewmate.db.engine import session_scope
from reviewmate.db.models import Priority, ReviewStatus
from reviewmate.db.repositories import ReviewRepository
from reviewmate.github.sync.enums import OutputFormat
from reviewmate.schemas.enums import ReviewSortField, SortDirection
from reviewmate.schemas.review import ReviewFilters, ReviewRead

app = typer.Typer(help="Fetch and list tracked reviews")


@app.command("fetch")
def fetch_review(
    email: EmailArgument,
    pr_url: str = typer.Argument(
        ...,
        help="GitHub pull request URL",
    ),
    github_token: GitHubTokenOption = None,
    output_format: OutputFormatOption = OutputFormat.TEXT,
) -> None:
    """Fetch one PR from GitHub into a user's reviews.

    Examples:
        reviewmate reviews fetch dev@example.com https://github.com/octocat/Hello-World/pull/1347
        reviewmate reviews fetch dev@example.com <url> --format json
        reviewmate -v reviews fetch dev@example.com <url>  # Debug logging
    """

    async def _fetch() -> dict[str, Any]:
        async with open_container() as container:
            async with session_scope(container.session_factory) as session:
                user = await require_user(session, email)
            result = await container.ingestion.upsert(user, pr_url, github_token)
            return result.to_dict()

    result = run_async_command(_fetch(), error_prefix="Fetch failed")

    # JSON output
    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(result))
        return

    # Text output
    review: dict[str, Any] = result["review"]
    title = review["title"]
    if len(title) > 60:
        title = title[:57] + "..."

    console.print(
        f"[bold]{str(result['action']).title()}[/bold] {review['identifier']}: {title} "
        f"({review['priority']}, {review['status']})"
    )


@app.command("list")
def list_reviews(
    email: EmailArgument,
    status: ReviewStatus | None = typer.Option(
        None,
        "--status",
        "-s",
        help="Only reviews with this status",
    ),
    priority: Priority | None = typer.Option(
        None,
        "--priority",
        "-p",
        help="Only reviews with this priority",
    ),
    repository: str | None = typer.Option(
        None,
        "--repository",
        "-r",
        help="Only reviews in this repository (owner/name)",
    ),
    sort_by: ReviewSortField = typer.Option(  # noqa: B008
        ReviewSortField.DATE,
        "--sort-by",
        help="Sort field",
    ),
    sort_dir: SortDirection = typer.Option(  # noqa: B008
        SortDirection.DESC,
        "--sort-dir",
        help="Sort direction",
    ),
) -> None:
    """List a user's tracked reviews.

    Examples:
        reviewmate reviews list dev@example.com
        reviewmate reviews list dev@example.com --status open --sort-by lines
    """
    filters = ReviewFilters(
        status=status,
        priority=priority,
        repository=repository,
        sort_by=sort_by,
        sort_dir=sort_dir,
    )

    async def _list() -> list[ReviewRead]:
        async with open_container() as container:
            async with session_scope(container.session_factory) as session:
                user = await require_user(session, email)
                reviews = await ReviewRepository(session).list_for_user(user.id, filters)
                return ReviewRead.from_orm_list(reviews)

    reviews = run_async_command(_list(), error_prefix="List failed")

    if not reviews:
        console.print("[yellow]No reviews found.[/yellow]")
        return

    table = Table(title=f"Reviews for {email}")
    table.add_column("Identifier", style="cyan")
    table.add_column("Title", max_width=50)
    table.add_column("Status")
    table.add_column("Priority")
    table.add_column("Lines", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("Opened")

    for review in reviews:
        table.add_row(
            review.identifier,
            review.title,
            review.status.value,
            review.priority.value,
            str(review.lines_changed),
            str(review.files_changed),
            review.opened_at.strftime("%Y-%m-%d"),
        )

    console.print(table)
