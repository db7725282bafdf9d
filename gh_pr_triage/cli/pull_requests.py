"""CLI commands for listing, approving and merging pull requests."""

import typer
from rich.console import Console
from rich.table import Table

from ..config import TriageConfig
from ..github_client.models import PullRequest
from ..services import create_services
from ..utils.date_parser import build_date_window
from .options import (
    AUTHOR_OPTION,
    CREATED_AFTER_OPTION,
    CREATED_BEFORE_OPTION,
    DELAY_OPTION,
    DRY_RUN_OPTION,
    INCLUDE_APPROVED_OPTION,
    LAST_DAYS_OPTION,
    LAST_MONTHS_OPTION,
    LAST_WEEKS_OPTION,
    MESSAGE_OPTION,
    OWNER_OPTION,
    PASSING_CHECKS_OPTION,
    REPO_OPTION,
    REPO_OPTION_OPTIONAL,
    TOKEN_OPTION,
)

console = Console()


def show_pull_requests(title: str, pull_requests: list[PullRequest]) -> None:
    """Render pull requests as a table."""
    table = Table(title=title)
    table.add_column("PR #", style="cyan")
    table.add_column("Repository", style="magenta")
    table.add_column("Title", style="white")
    table.add_column("Author", style="green")
    table.add_column("Created", style="yellow")

    for pr in pull_requests:
        table.add_row(
            str(pr.number),
            f"{pr.owner}/{pr.repository}",
            pr.title[:50] + "..." if len(pr.title) > 50 else pr.title,
            pr.author,
            pr.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


def list_prs(
    owner: str = OWNER_OPTION,
    repo: str | None = REPO_OPTION_OPTIONAL,
    author: str | None = AUTHOR_OPTION,
    non_approved: bool = typer.Option(
        False, "--non-approved", help="Only pull requests without an approving review"
    ),
    created_after: str | None = CREATED_AFTER_OPTION,
    created_before: str | None = CREATED_BEFORE_OPTION,
    last_days: int | None = LAST_DAYS_OPTION,
    last_weeks: int | None = LAST_WEEKS_OPTION,
    last_months: int | None = LAST_MONTHS_OPTION,
    token: str | None = TOKEN_OPTION,
) -> None:
    """List open pull requests of a repository, or of every repository of an owner.

    Examples:
        gh-pr-triage list-prs --owner myorg --repo myrepo --author dependabot[bot]
        gh-pr-triage list-prs --owner myorg --non-approved --last-days 7
    """
    failed = False
    try:
        window = build_date_window(
            created_after, created_before, last_days, last_weeks, last_months
        )
        services = create_services(token=token)

        if repo is None:
            console.print(f"🔍 Collecting open PRs for every repository of {owner}")
            if non_approved:
                pull_requests = services.approvals.get_all_non_approved_for_owner(
                    owner, author=author, window=window
                )
            else:
                pull_requests = services.fetcher.fetch_for_owner(
                    owner, author=author, window=window
                )
        else:
            console.print(f"🔍 Collecting open PRs for {owner}/{repo}")
            if non_approved:
                pull_requests = services.approvals.get_all_non_approved(
                    owner, repo, author=author, window=window
                )
            else:
                pull_requests = services.fetcher.fetch_open_pull_requests(
                    owner, repo, author=author, window=window
                )

        if not pull_requests:
            console.print("❌ No pull requests found matching the criteria")
        else:
            show_pull_requests("Open Pull Requests", pull_requests)
            console.print(f"✅ Found {len(pull_requests)} pull requests")

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


def approve(
    owner: str = OWNER_OPTION,
    repo: str = REPO_OPTION,
    message: str = MESSAGE_OPTION,
    author: str | None = AUTHOR_OPTION,
    include_approved: bool = INCLUDE_APPROVED_OPTION,
    delay: float | None = DELAY_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    created_after: str | None = CREATED_AFTER_OPTION,
    created_before: str | None = CREATED_BEFORE_OPTION,
    last_days: int | None = LAST_DAYS_OPTION,
    last_weeks: int | None = LAST_WEEKS_OPTION,
    last_months: int | None = LAST_MONTHS_OPTION,
    token: str | None = TOKEN_OPTION,
) -> None:
    """Approve open pull requests that are not approved yet.

    Approvals run one at a time with --delay seconds between them. The first
    failed approval stops the run; pull requests approved before it stay
    approved.

    Examples:
        gh-pr-triage approve --owner myorg --repo myrepo \\
            --author dependabot[bot] --message "LGTM" --dry-run
    """
    failed = False
    try:
        window = build_date_window(
            created_after, created_before, last_days, last_weeks, last_months
        )
        config = TriageConfig()
        pause = config.delay if delay is None else delay
        services = create_services(config=config, token=token)

        if dry_run:
            if include_approved:
                candidates = services.fetcher.fetch_open_pull_requests(
                    owner, repo, author=author, window=window
                )
            else:
                candidates = services.approvals.get_all_non_approved(
                    owner, repo, author=author, window=window
                )
            if candidates:
                show_pull_requests("Pull Requests To Approve", candidates)
            console.print(
                f"📋 [blue]Dry run: {len(candidates)} PR(s) would be approved[/blue]"
            )
        else:
            if include_approved:
                approved = services.actions.approve_all(
                    owner, repo, message, author=author, window=window, delay=pause
                )
            else:
                approved = services.actions.approve_all_non_approved(
                    owner, repo, message, author=author, window=window, delay=pause
                )
            console.print(
                f"✨ [green]Approved {len(approved)} pull request(s)[/green]"
            )

    except KeyboardInterrupt:
        console.print("\n❌ [yellow]Operation cancelled by user[/yellow]")
        failed = True
    except ValueError as e:
        console.print(f"❌ [red]Error: {e}[/red]")
        failed = True
    except Exception as e:
        console.print(f"❌ [red]Approval stopped: {e}[/red]")
        console.print("Pull requests approved before the failure remain approved.")
        failed = True

    if failed:
        raise typer.Exit(1)


def merge(
    owner: str = OWNER_OPTION,
    repo: str | None = REPO_OPTION_OPTIONAL,
    message: str = MESSAGE_OPTION,
    author: str | None = AUTHOR_OPTION,
    passing_checks: bool = PASSING_CHECKS_OPTION,
    delay: float | None = DELAY_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    created_after: str | None = CREATED_AFTER_OPTION,
    created_before: str | None = CREATED_BEFORE_OPTION,
    last_days: int | None = LAST_DAYS_OPTION,
    last_weeks: int | None = LAST_WEEKS_OPTION,
    last_months: int | None = LAST_MONTHS_OPTION,
    token: str | None = TOKEN_OPTION,
) -> None:
    """Squash-merge open pull requests.

    With --repo, merges that repository's pull requests. Without it, merges
    across every repository of the owner, visiting repositories in random
    order one at a time.

    Examples:
        gh-pr-triage merge --owner myorg --repo myrepo --message "Merge" \\
            --passing-checks
        gh-pr-triage merge --owner myorg --author dependabot[bot] \\
            --message "Automated merge" --passing-checks --delay 2
    """
    failed = False
    try:
        window = build_date_window(
            created_after, created_before, last_days, last_weeks, last_months
        )
        config = TriageConfig()
        pause = config.delay if delay is None else delay
        services = create_services(config=config, token=token)

        if dry_run:
            if repo is None:
                candidates = services.fetcher.fetch_for_owner(
                    owner, author=author, window=window
                )
            else:
                candidates = services.fetcher.fetch_open_pull_requests(
                    owner, repo, author=author, window=window
                )
            if passing_checks:
                candidates = [
                    pr
                    for pr in candidates
                    if services.actions.checks_passing(pr.owner, pr.repository, pr)
                ]
            if candidates:
                show_pull_requests("Pull Requests To Merge", candidates)
            count = len(candidates)
            console.print(
                f"📋 [blue]Dry run: {count} PR(s) are merge candidates[/blue]"
            )
        else:
            if repo is None:
                merged = services.actions.merge_for_owner_incrementally(
                    owner,
                    message,
                    check_passing_checks=passing_checks,
                    delay=pause,
                    author=author,
                    window=window,
                )
            elif passing_checks:
                merged = services.actions.merge_all_with_passing_checks(
                    owner, repo, message, author=author, window=window, delay=pause
                )
            else:
                merged = services.actions.merge_all(
                    owner, repo, message, author=author, window=window, delay=pause
                )
            if merged:
                show_pull_requests("Merged Pull Requests", merged)
            console.print(f"✨ [green]Merged {len(merged)} pull request(s)[/green]")

    except KeyboardInterrupt:
        console.print("\n❌ [yellow]Operation cancelled by user[/yellow]")
        failed = True
    except ValueError as e:
        console.print(f"❌ [red]Error: {e}[/red]")
        failed = True
    except Exception as e:
        console.print(f"❌ [red]Merge stopped: {e}[/red]")
        console.print("Pull requests merged before the failure remain merged.")
        failed = True

    if failed:
        raise typer.Exit(1)
