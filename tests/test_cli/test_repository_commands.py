"""Tests for the repository classification commands."""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from gh_pr_triage.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner(env={"NO_COLOR": "1", "TERM": "dumb", "GITHUB_TOKEN": "t"})


@pytest.fixture
def services() -> Iterator[MagicMock]:
    with patch("gh_pr_triage.cli.repositories.create_services") as mock_create:
        services = MagicMock()
        mock_create.return_value = services
        yield services


def test_repos_with_open_prs(runner, services, make_repo) -> None:
    services.filters.get_all_repositories_with_open_pull_requests.return_value = [
        make_repo("a"),
        make_repo("b"),
    ]

    result = runner.invoke(app, ["repos-with-open-prs", "-o", "test-org"])

    assert result.exit_code == 0
    assert "2 matching repositories" in result.stdout
    assert "test-org/a" in result.stdout


def test_repos_with_failed_builds_none(runner, services) -> None:
    services.filters.get_all_repositories_with_failed_builds.return_value = []

    result = runner.invoke(
        app, ["repos-with-failed-builds", "-o", "test-org", "--last-weeks", "2"]
    )

    assert result.exit_code == 0
    assert "No matching repositories" in result.stdout
    window = services.filters.get_all_repositories_with_failed_builds.call_args.kwargs[
        "window"
    ]
    assert window.start_at is not None


def test_enumeration_error(runner, services) -> None:
    services.filters.get_all_repositories_with_open_pull_requests.side_effect = (
        RuntimeError("boom")
    )

    result = runner.invoke(app, ["repos-with-open-prs", "-o", "test-org"])

    assert result.exit_code == 1
    assert "Unexpected error" in result.stdout
