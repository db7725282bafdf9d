"""Standardized CLI option definitions for consistent shorthand mappings.

This module provides centralized option definitions to ensure consistent
shorthand options across all commands.
"""

import typer

# Core options - used across most commands
OWNER_OPTION = typer.Option(
    ..., "--owner", "-o", help="GitHub user or organization login"
)

REPO_OPTION = typer.Option(..., "--repo", "-r", help="GitHub repository name")

REPO_OPTION_OPTIONAL = typer.Option(
    None,
    "--repo",
    "-r",
    help="GitHub repository name (omit to act on every repository of the owner)",
)

AUTHOR_OPTION = typer.Option(
    None, "--author", "-a", help="Only pull requests opened by this login"
)

MESSAGE_OPTION = typer.Option(
    ..., "--message", "-m", help="Review body or squash commit message"
)

# Behavior options - control command behavior
DRY_RUN_OPTION = typer.Option(
    False, "--dry-run", "-d", help="List the pull requests without acting on them"
)

DELAY_OPTION = typer.Option(
    None,
    "--delay",
    help="Delay between API mutations in seconds (defaults to PR_TRIAGE_DELAY or 1.0)",
)

PASSING_CHECKS_OPTION = typer.Option(
    False,
    "--passing-checks",
    help="Skip pull requests whose latest check runs failed",
)

INCLUDE_APPROVED_OPTION = typer.Option(
    False,
    "--include-approved",
    help="Also approve pull requests that already have an approving review",
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")

# Authentication options
TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

# Date filtering options - absolute dates
CREATED_AFTER_OPTION = typer.Option(
    None,
    "--created-after",
    help="Only pull requests created on or after date (YYYY-MM-DD, UTC)",
)

CREATED_BEFORE_OPTION = typer.Option(
    None,
    "--created-before",
    help="Only pull requests created on or before date (YYYY-MM-DD, UTC)",
)

# Date filtering options - relative dates
LAST_DAYS_OPTION = typer.Option(
    None, "--last-days", help="Only pull requests from the last N days"
)

LAST_WEEKS_OPTION = typer.Option(
    None, "--last-weeks", help="Only pull requests from the last N weeks"
)

LAST_MONTHS_OPTION = typer.Option(
    None, "--last-months", help="Only pull requests from the last N months"
)
