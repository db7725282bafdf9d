"""Tests for build status resolution."""

from datetime import datetime, timedelta, timezone

import pytest

from gh_pr_triage.github_client.models import Run
from gh_pr_triage.github_client.runs import BuildStatusResolver, latest_runs

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def run(name: str, conclusion: str | None, minutes: int = 0) -> Run:
    return Run(
        name=name,
        status="completed" if conclusion else "in_progress",
        conclusion=conclusion,
        started_at=T0 + timedelta(minutes=minutes),
        completed_at=T0 + timedelta(minutes=minutes + 1) if conclusion else None,
    )


class TestLatestRuns:
    """Test collapsing re-runs to the newest run per check."""

    def test_rerun_supersedes_failure(self) -> None:
        result = latest_runs([run("build", "failure", 0), run("build", "success", 10)])
        assert [r.conclusion for r in result] == ["success"]

    def test_order_of_input_does_not_matter(self) -> None:
        result = latest_runs([run("build", "success", 10), run("build", "failure", 0)])
        assert [r.conclusion for r in result] == ["success"]

    def test_distinct_checks_kept(self) -> None:
        result = latest_runs([run("build", "success"), run("lint", "failure")])
        assert {r.name for r in result} == {"build", "lint"}

    def test_empty(self) -> None:
        assert latest_runs([]) == []


class TestBuildStatusResolver:
    """Test has_failed_run."""

    @pytest.fixture
    def resolver(self, mock_client) -> BuildStatusResolver:
        return BuildStatusResolver(mock_client)

    def test_no_runs_is_not_failed(self, resolver, mock_client, make_pr, make_repo):
        mock_client.list_check_runs.return_value = []
        assert resolver.has_failed_run(make_repo("test-repo"), make_pr(1)) is False

    def test_failed_run(self, resolver, mock_client, make_pr, make_repo) -> None:
        mock_client.list_check_runs.return_value = [
            run("build", "success"),
            run("test", "failure"),
        ]

        assert resolver.has_failed_run(make_repo("test-repo"), make_pr(1)) is True
        mock_client.list_check_runs.assert_called_once_with(
            "test-org", "test-repo", "sha1", cancellation=None
        )

    def test_timed_out_counts_as_failed(
        self, resolver, mock_client, make_pr, make_repo
    ) -> None:
        mock_client.list_check_runs.return_value = [run("build", "timed_out")]
        assert resolver.has_failed_run(make_repo("test-repo"), make_pr(1)) is True

    def test_in_progress_is_not_failed(
        self, resolver, mock_client, make_pr, make_repo
    ) -> None:
        mock_client.list_check_runs.return_value = [run("build", None)]
        assert resolver.has_failed_run(make_repo("test-repo"), make_pr(1)) is False

    def test_fetches_head_sha_when_missing(
        self, resolver, mock_client, make_pr
    ) -> None:
        """Test that a pull request without head SHA is re-read first."""
        pr = make_pr(4).model_copy(update={"head_sha": None})
        mock_client.get_pull_request.return_value = make_pr(4, head_sha="abc")
        mock_client.list_check_runs.return_value = []

        resolver.has_failed_run_for("test-org", "test-repo", pr)

        mock_client.get_pull_request.assert_called_once_with(
            "test-org", "test-repo", 4, cancellation=None
        )
        assert mock_client.list_check_runs.call_args.args[2] == "abc"

    def test_errors_propagate(self, resolver, mock_client, make_pr) -> None:
        mock_client.list_check_runs.side_effect = RuntimeError("boom")
        with pytest.raises(RuntimeError):
            resolver.has_failed_run_for("test-org", "test-repo", make_pr(1))
