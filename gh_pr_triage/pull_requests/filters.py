"""Repository classification by open pull requests and failed builds."""

import logging
from typing import TYPE_CHECKING

from ..github_client.models import DateWindow, Repository
from ..utils.pacing import CancellationToken, OperationCancelledError

if TYPE_CHECKING:
    from ..github_client.runs import BuildStatusResolver
    from .fetcher import PullRequestFetcher

logger = logging.getLogger(__name__)


class RepositoryFilter:
    """Fans repository lists out through the fetcher and build resolver."""

    def __init__(
        self,
        fetcher: "PullRequestFetcher",
        build_status: "BuildStatusResolver",
    ):
        self.fetcher = fetcher
        self.build_status = build_status

    def filter_with_open_pull_requests(
        self,
        repositories: list[Repository],
        window: DateWindow | None = None,
        log: bool = True,
        cancellation: CancellationToken | None = None,
    ) -> list[Repository]:
        """Repositories with at least one open pull request inside ``window``."""
        result: list[Repository] = []

        for repository in repositories:
            pull_requests = self.fetcher.fetch_open_pull_requests_for_repository(
                repository, window=window, log=False, cancellation=cancellation
            )
            if not pull_requests:
                continue

            if log:
                logger.info(
                    "-- %s has %d PRs open --", repository.name, len(pull_requests)
                )
            result.append(repository)

        return result

    def filter_with_failed_builds(
        self,
        repositories: list[Repository],
        window: DateWindow | None = None,
        log: bool = True,
        cancellation: CancellationToken | None = None,
    ) -> list[Repository]:
        """Repositories with an open pull request whose latest build failed.

        Scanning a repository stops at its first failing pull request. An
        error while scanning one repository is logged and that repository is
        left out; the remaining repositories are still evaluated.
        """
        result: list[Repository] = []

        for repository in repositories:
            try:
                if self._has_failed_build(repository, window, log, cancellation):
                    result.append(repository)
            except OperationCancelledError:
                raise
            except Exception as e:
                logger.warning(
                    "Could not check builds for %s, treating as passing: %s",
                    repository.full_name,
                    e,
                )

        return result

    def _has_failed_build(
        self,
        repository: Repository,
        window: DateWindow | None,
        log: bool,
        cancellation: CancellationToken | None,
    ) -> bool:
        pull_requests = self.fetcher.fetch_open_pull_requests_for_repository(
            repository, window=window, log=False, cancellation=cancellation
        )

        for pr in pull_requests:
            if not self.build_status.has_failed_run(
                repository, pr, cancellation=cancellation
            ):
                continue

            if log:
                logger.info(
                    "Repository (%s) has a PR (%s) with a failed build",
                    repository.full_name,
                    pr.title,
                )
            return True

        return False

    def get_all_repositories_with_open_pull_requests(
        self,
        owner: str,
        window: DateWindow | None = None,
        log: bool = True,
        cancellation: CancellationToken | None = None,
    ) -> list[Repository]:
        if log:
            logger.info(
                "Getting all GitHub repos with open pull requests for owner (%s)...",
                owner,
            )
        repositories = self.fetcher.list_repositories(owner, window, cancellation)
        return self.filter_with_open_pull_requests(
            repositories, window=window, log=log, cancellation=cancellation
        )

    def get_all_repositories_with_failed_builds(
        self,
        owner: str,
        window: DateWindow | None = None,
        log: bool = True,
        cancellation: CancellationToken | None = None,
    ) -> list[Repository]:
        if log:
            logger.info(
                "Getting all GitHub repos with failed builds for owner (%s)...", owner
            )
        repositories = self.fetcher.list_repositories(owner, window, cancellation)
        return self.filter_with_failed_builds(
            repositories, window=window, log=log, cancellation=cancellation
        )
