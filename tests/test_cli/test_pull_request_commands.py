"""Tests for the list-prs, approve and merge commands."""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from github.GithubException import GithubException
from typer.testing import CliRunner

from gh_pr_triage.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner(
        env={
            "NO_COLOR": "1",
            "TERM": "dumb",
            "GITHUB_TOKEN": "t",
            "PR_TRIAGE_DELAY": "0.5",
        }
    )


@pytest.fixture
def services() -> Iterator[MagicMock]:
    with patch("gh_pr_triage.cli.pull_requests.create_services") as mock_create:
        services = MagicMock()
        mock_create.return_value = services
        yield services


class TestListPrs:
    """Test list-prs command."""

    def test_single_repository(self, runner, services, make_pr) -> None:
        services.fetcher.fetch_open_pull_requests.return_value = [make_pr(1)]

        result = runner.invoke(
            app, ["list-prs", "-o", "test-org", "-r", "test-repo", "-a", "bot"]
        )

        assert result.exit_code == 0
        assert "Found 1 pull requests" in result.stdout
        call = services.fetcher.fetch_open_pull_requests.call_args
        assert call.args == ("test-org", "test-repo")
        assert call.kwargs["author"] == "bot"
        assert call.kwargs["window"] is None

    def test_owner_wide_non_approved(self, runner, services, make_pr) -> None:
        services.approvals.get_all_non_approved_for_owner.return_value = []

        result = runner.invoke(app, ["list-prs", "-o", "test-org", "--non-approved"])

        assert result.exit_code == 0
        assert "No pull requests found" in result.stdout
        services.approvals.get_all_non_approved_for_owner.assert_called_once()

    def test_date_window_is_built(self, runner, services) -> None:
        services.fetcher.fetch_open_pull_requests.return_value = []

        runner.invoke(
            app,
            [
                "list-prs",
                "-o",
                "test-org",
                "-r",
                "test-repo",
                "--created-after",
                "2024-01-01",
            ],
        )

        window = services.fetcher.fetch_open_pull_requests.call_args.kwargs["window"]
        assert window.start_at.year == 2024
        assert window.end_at is None

    def test_conflicting_dates(self, runner, services) -> None:
        result = runner.invoke(
            app,
            [
                "list-prs",
                "-o",
                "test-org",
                "--created-after",
                "2024-01-01",
                "--last-days",
                "3",
            ],
        )

        assert result.exit_code == 1
        assert "Cannot combine" in result.stdout

    def test_api_error(self, runner, services) -> None:
        services.fetcher.fetch_open_pull_requests.side_effect = GithubException(
            502, {"message": "Bad Gateway"}, None
        )

        result = runner.invoke(app, ["list-prs", "-o", "test-org", "-r", "test-repo"])

        assert result.exit_code == 1
        assert "Unexpected error" in result.stdout


class TestApprove:
    """Test approve command."""

    def test_approves_non_approved(self, runner, services, make_pr) -> None:
        services.actions.approve_all_non_approved.return_value = [make_pr(1)]

        result = runner.invoke(
            app, ["approve", "-o", "test-org", "-r", "test-repo", "-m", "LGTM"]
        )

        assert result.exit_code == 0
        assert "Approved 1 pull request(s)" in result.stdout
        call = services.actions.approve_all_non_approved.call_args
        assert call.args == ("test-org", "test-repo", "LGTM")
        assert call.kwargs["delay"] == 0.5

    def test_delay_option_overrides_environment(self, runner, services) -> None:
        services.actions.approve_all_non_approved.return_value = []

        runner.invoke(
            app,
            ["approve", "-o", "o", "-r", "r", "-m", "LGTM", "--delay", "3"],
        )

        assert services.actions.approve_all_non_approved.call_args.kwargs["delay"] == 3

    def test_include_approved(self, runner, services) -> None:
        services.actions.approve_all.return_value = []

        result = runner.invoke(
            app, ["approve", "-o", "o", "-r", "r", "-m", "LGTM", "--include-approved"]
        )

        assert result.exit_code == 0
        services.actions.approve_all.assert_called_once()
        services.actions.approve_all_non_approved.assert_not_called()

    def test_dry_run_does_not_approve(self, runner, services, make_pr) -> None:
        services.approvals.get_all_non_approved.return_value = [make_pr(1), make_pr(2)]

        result = runner.invoke(
            app, ["approve", "-o", "o", "-r", "r", "-m", "LGTM", "--dry-run"]
        )

        assert result.exit_code == 0
        assert "2 PR(s) would be approved" in result.stdout
        services.actions.approve_all_non_approved.assert_not_called()

    def test_failure_exits_non_zero(self, runner, services) -> None:
        services.actions.approve_all_non_approved.side_effect = GithubException(
            422, {"message": "Unprocessable"}, None
        )

        result = runner.invoke(app, ["approve", "-o", "o", "-r", "r", "-m", "LGTM"])

        assert result.exit_code == 1
        assert "Approval stopped" in result.stdout

    def test_message_is_required(self, runner, services) -> None:
        result = runner.invoke(app, ["approve", "-o", "o", "-r", "r"])
        assert result.exit_code != 0


class TestMerge:
    """Test merge command."""

    def test_merge_repository(self, runner, services, make_pr) -> None:
        services.actions.merge_all.return_value = [make_pr(1)]

        result = runner.invoke(app, ["merge", "-o", "o", "-r", "r", "-m", "Merge"])

        assert result.exit_code == 0
        assert "Merged 1 pull request(s)" in result.stdout
        services.actions.merge_all_with_passing_checks.assert_not_called()

    def test_merge_with_passing_checks(self, runner, services) -> None:
        services.actions.merge_all_with_passing_checks.return_value = []

        runner.invoke(
            app, ["merge", "-o", "o", "-r", "r", "-m", "Merge", "--passing-checks"]
        )

        services.actions.merge_all_with_passing_checks.assert_called_once()
        services.actions.merge_all.assert_not_called()

    def test_merge_owner_incrementally(self, runner, services) -> None:
        services.actions.merge_for_owner_incrementally.return_value = []

        result = runner.invoke(
            app, ["merge", "-o", "o", "-m", "Merge", "--passing-checks", "-a", "bot"]
        )

        assert result.exit_code == 0
        call = services.actions.merge_for_owner_incrementally.call_args
        assert call.args == ("o", "Merge")
        assert call.kwargs["check_passing_checks"] is True
        assert call.kwargs["author"] == "bot"
        assert call.kwargs["delay"] == 0.5

    def test_dry_run_owner(self, runner, services, make_pr) -> None:
        services.fetcher.fetch_for_owner.return_value = [make_pr(1)]

        result = runner.invoke(app, ["merge", "-o", "o", "-m", "Merge", "-d"])

        assert result.exit_code == 0
        assert "merge candidates" in result.stdout
        services.actions.merge_for_owner_incrementally.assert_not_called()

    def test_dry_run_with_passing_checks(self, runner, services, make_pr) -> None:
        """Test that the dry run leaves out PRs a passing-checks merge skips."""
        services.fetcher.fetch_open_pull_requests.return_value = [
            make_pr(1),
            make_pr(2),
            make_pr(3),
        ]
        services.actions.checks_passing.side_effect = (
            lambda owner, name, pr: pr.number != 2
        )

        result = runner.invoke(
            app,
            ["merge", "-o", "o", "-r", "r", "-m", "Merge", "-d", "--passing-checks"],
        )

        assert result.exit_code == 0
        assert "2 PR(s) are merge candidates" in result.stdout
        calls = services.actions.checks_passing.call_args_list
        checked = [c.args[2].number for c in calls]
        assert checked == [1, 2, 3]
        services.actions.merge_all_with_passing_checks.assert_not_called()

    def test_dry_run_without_passing_checks_skips_lookup(
        self, runner, services, make_pr
    ) -> None:
        services.fetcher.fetch_open_pull_requests.return_value = [make_pr(1)]

        runner.invoke(app, ["merge", "-o", "o", "-r", "r", "-m", "Merge", "-d"])

        services.actions.checks_passing.assert_not_called()

    def test_failure_exits_non_zero(self, runner, services) -> None:
        services.actions.merge_all.side_effect = GithubException(
            405, {"message": "Not mergeable"}, None
        )

        result = runner.invoke(app, ["merge", "-o", "o", "-r", "r", "-m", "Merge"])

        assert result.exit_code == 1
        assert "Merge stopped" in result.stdout
