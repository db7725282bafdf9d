"""CLI commands for classifying an owner's repositories."""

import typer
from rich.console import Console
from rich.table import Table

from ..github_client.models import Repository
from ..services import create_services
from ..utils.date_parser import build_date_window
from .options import (
    CREATED_AFTER_OPTION,
    CREATED_BEFORE_OPTION,
    LAST_DAYS_OPTION,
    LAST_MONTHS_OPTION,
    LAST_WEEKS_OPTION,
    OWNER_OPTION,
    TOKEN_OPTION,
)

console = Console()


def show_repositories(title: str, repositories: list[Repository]) -> None:
    table = Table(title=title)
    table.add_column("Repository", style="cyan")
    table.add_column("Default Branch", style="green")
    table.add_column("Created", style="yellow")

    for repo in sorted(repositories, key=lambda r: r.full_name):
        table.add_row(
            repo.full_name,
            repo.default_branch or "-",
            repo.created_at.strftime("%Y-%m-%d") if repo.created_at else "-",
        )

    console.print(table)


def _run_scan(
    owner: str,
    failed_builds: bool,
    created_after: str | None,
    created_before: str | None,
    last_days: int | None,
    last_weeks: int | None,
    last_months: int | None,
    token: str | None,
) -> None:
    failed = False
    try:
        window = build_date_window(
            created_after, created_before, last_days, last_weeks, last_months
        )
        services = create_services(token=token)

        if failed_builds:
            console.print(f"🔍 Scanning {owner} for open PRs with failed builds")
            repositories = services.filters.get_all_repositories_with_failed_builds(
                owner, window=window
            )
            title = "Repositories With Failed Builds"
        else:
            console.print(f"🔍 Scanning {owner} for repositories with open PRs")
            filters = services.filters
            repositories = filters.get_all_repositories_with_open_pull_requests(
                owner, window=window
            )
            title = "Repositories With Open Pull Requests"

        if not repositories:
            console.print("✅ No matching repositories")
        else:
            show_repositories(title, repositories)
            console.print(f"📊 {len(repositories)} matching repositories")

    except KeyboardInterrupt:
        console.print("\n❌ [yellow]Operation cancelled by user[/yellow]")
        failed = True
    except ValueError as e:
        console.print(f"❌ [red]Error: {e}[/red]")
        failed = True
    except Exception as e:
        console.print(f"❌ [red]Unexpected error: {e}[/red]")
        console.print("Please check your GitHub token and network connection.")
        failed = True

    if failed:
        raise typer.Exit(1)


def repos_with_open_prs(
    owner: str = OWNER_OPTION,
    created_after: str | None = CREATED_AFTER_OPTION,
    created_before: str | None = CREATED_BEFORE_OPTION,
    last_days: int | None = LAST_DAYS_OPTION,
    last_weeks: int | None = LAST_WEEKS_OPTION,
    last_months: int | None = LAST_MONTHS_OPTION,
    token: str | None = TOKEN_OPTION,
) -> None:
    """List the owner's repositories that have open pull requests."""
    _run_scan(
        owner,
        False,
        created_after,
        created_before,
        last_days,
        last_weeks,
        last_months,
        token,
    )


def repos_with_failed_builds(
    owner: str = OWNER_OPTION,
    created_after: str | None = CREATED_AFTER_OPTION,
    created_before: str | None = CREATED_BEFORE_OPTION,
    last_days: int | None = LAST_DAYS_OPTION,
    last_weeks: int | None = LAST_WEEKS_OPTION,
    last_months: int | None = LAST_MONTHS_OPTION,
    token: str | None = TOKEN_OPTION,
) -> None:
    """List the owner's repositories with an open pull request whose build failed.

    Repositories that cannot be checked are reported in the log and left out.
    """
    _run_scan(
        owner,
        True,
        created_after,
        created_before,
        last_days,
        last_weeks,
        last_months,
        token,
    )
