"""Main CLI entry point."""

import logging

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from ..github_client.client import GitHubClient
from .options import TOKEN_OPTION, VERBOSE_OPTION
from .pull_requests import approve, list_prs, merge
from .repositories import repos_with_failed_builds, repos_with_open_prs

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="gh-pr-triage",
    help="Bulk triage, approval and merging of GitHub pull requests",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


def configure_logging(verbose: bool) -> None:
    """Route library log events through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # PyGitHub and urllib3 are noisy at DEBUG
    logging.getLogger("github").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


@app.callback()
def main(verbose: bool = VERBOSE_OPTION) -> None:
    """Bulk triage, approval and merging of GitHub pull requests."""
    configure_logging(verbose)


# All commands including main command support -h shorthand via context_settings


app.command(name="list-prs", context_settings={"help_option_names": ["-h", "--help"]})(
    list_prs
)
app.command(name="approve", context_settings={"help_option_names": ["-h", "--help"]})(
    approve
)
app.command(name="merge", context_settings={"help_option_names": ["-h", "--help"]})(
    merge
)
app.command(
    name="repos-with-open-prs", context_settings={"help_option_names": ["-h", "--help"]}
)(repos_with_open_prs)
app.command(
    name="repos-with-failed-builds",
    context_settings={"help_option_names": ["-h", "--help"]},
)(repos_with_failed_builds)


@app.command(
    name="rate-limit", context_settings={"help_option_names": ["-h", "--help"]}
)
def rate_limit(token: str | None = TOKEN_OPTION) -> None:
    """Show the remaining GitHub API requests for the current token."""
    try:
        remaining = GitHubClient(token=token).get_rate_limit_remaining()
    except ValueError as e:
        console.print(f"❌ [red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"GitHub API rate limit: {remaining} requests remaining")


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from gh_pr_triage import __version__

    console.print(f"GitHub PR Triage v{__version__}")


if __name__ == "__main__":
    app()
