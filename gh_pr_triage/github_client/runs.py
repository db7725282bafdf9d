"""Build status lookups for pull requests via the checks API."""

import logging
from typing import TYPE_CHECKING

from ..utils.pacing import CancellationToken
from .models import PullRequest, Repository, Run

if TYPE_CHECKING:
    from .client import GitHubClient

logger = logging.getLogger(__name__)


def latest_runs(runs: list[Run]) -> list[Run]:
    """Keep only the most recent run of each check name.

    Re-runs of a check are reported as separate runs on the same commit;
    only the newest one reflects the current build status.
    """
    latest: dict[str, Run] = {}
    for run in runs:
        current = latest.get(run.name)
        if current is None or _run_time(run) >= _run_time(current):
            latest[run.name] = run
    return list(latest.values())


def _run_time(run: Run) -> float:
    moment = run.completed_at or run.started_at
    return moment.timestamp() if moment is not None else float("-inf")


class BuildStatusResolver:
    """Determines whether a pull request's latest CI runs failed."""

    def __init__(self, client: "GitHubClient"):
        self.client = client

    def has_failed_run(
        self,
        repository: Repository,
        pull_request: PullRequest,
        cancellation: CancellationToken | None = None,
    ) -> bool:
        return self.has_failed_run_for(
            repository.owner, repository.name, pull_request, cancellation
        )

    def has_failed_run_for(
        self,
        owner: str,
        name: str,
        pull_request: PullRequest,
        cancellation: CancellationToken | None = None,
    ) -> bool:
        """Check the head commit of ``pull_request`` for a failed check run.

        Returns:
            True if the latest run of any check concluded in failure;
            False when there are no runs at all
        """
        sha = pull_request.head_sha
        if sha is None:
            sha = self.client.get_pull_request(
                owner, name, pull_request.number, cancellation=cancellation
            ).head_sha
        if sha is None:
            return False

        runs = self.client.list_check_runs(owner, name, sha, cancellation=cancellation)
        failed = [run for run in latest_runs(runs) if run.failed]

        for run in failed:
            logger.debug(
                "%s check '%s' concluded %s",
                pull_request.full_name,
                run.name,
                run.conclusion,
            )
        return bool(failed)
