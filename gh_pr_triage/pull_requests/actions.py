"""Batch approve and merge actions over filtered pull request sets.

Mutating batches run strictly one pull request at a time, in fetch order,
with a pacing pause between consecutive API mutations. The first failed
approval or merge aborts the rest of the batch and propagates.
"""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..github_client.models import DateWindow, PullRequest, Repository
from ..utils.pacing import (
    CancellationToken,
    FixedDelayPacer,
    OperationCancelledError,
    Pacer,
    Permutation,
    ensure_token,
    shuffled,
)

if TYPE_CHECKING:
    from ..github_client.client import GitHubClient
    from ..github_client.runs import BuildStatusResolver
    from .approvals import ApprovalResolver
    from .fetcher import PullRequestFetcher

logger = logging.getLogger(__name__)


class _PacedSequence:
    """Runs actions one after another, pausing between consecutive ones."""

    def __init__(self, pacer: Pacer, delay: float, cancellation: CancellationToken):
        self.pacer = pacer
        self.delay = delay
        self.cancellation = cancellation
        self.count = 0

    def run(self, action: Callable[[], None]) -> None:
        if self.count:
            self.pacer.pause(self.delay, self.cancellation)
        action()
        self.count += 1


class BatchActionOrchestrator:
    """Sequences approve and merge actions across pull requests and repositories."""

    def __init__(
        self,
        client: "GitHubClient",
        fetcher: "PullRequestFetcher",
        approvals: "ApprovalResolver",
        build_status: "BuildStatusResolver",
        pacer: Pacer | None = None,
        permute: Permutation[Repository] | None = None,
    ):
        """Initialize orchestrator.

        Args:
            client: Authenticated GitHubClient instance
            fetcher: Source of open pull requests
            approvals: Approval state resolver
            build_status: Build status resolver for passing-checks merges
            pacer: Pause policy between mutations (default: fixed delay)
            permute: Repository ordering for owner-wide merges
                (default: unseeded random shuffle)
        """
        self.client = client
        self.fetcher = fetcher
        self.approvals = approvals
        self.build_status = build_status
        self.pacer = pacer or FixedDelayPacer()
        self.permute = permute or shuffled

    def approve(
        self,
        owner: str,
        name: str,
        pull_request: PullRequest,
        message: str,
        cancellation: CancellationToken | None = None,
    ) -> None:
        """Create an approving review on a single pull request."""
        logger.info("Approving PR #%d (%s)...", pull_request.number, message)
        self.client.create_approving_review(
            owner, name, pull_request.number, message, cancellation=cancellation
        )
        logger.info("Approved PR #%d (%s)", pull_request.number, message)

    def approve_all(
        self,
        owner: str,
        name: str,
        message: str,
        author: str | None = None,
        window: DateWindow | None = None,
        delay: float = 0.0,
        cancellation: CancellationToken | None = None,
    ) -> list[PullRequest]:
        """Approve every open pull request, whether or not already approved.

        Returns:
            The approved pull requests, in fetch order
        """
        logger.info("Approving all PRs for %s/%s...", owner, name)
        pull_requests = self.fetcher.fetch_open_pull_requests(
            owner, name, author=author, window=window, cancellation=cancellation
        )
        return self._approve_each(
            owner, name, pull_requests, message, delay, cancellation
        )

    def approve_all_non_approved(
        self,
        owner: str,
        name: str,
        message: str,
        author: str | None = None,
        window: DateWindow | None = None,
        delay: float = 0.0,
        cancellation: CancellationToken | None = None,
    ) -> list[PullRequest]:
        """Approve the open pull requests that have no approving review yet.

        Returns:
            The approved pull requests, in fetch order
        """
        logger.info("Approving all non-approved PRs for %s/%s...", owner, name)
        pull_requests = self.approvals.get_all_non_approved(
            owner, name, author=author, window=window, cancellation=cancellation
        )
        return self._approve_each(
            owner, name, pull_requests, message, delay, cancellation
        )

    def _approve_each(
        self,
        owner: str,
        name: str,
        pull_requests: list[PullRequest],
        message: str,
        delay: float,
        cancellation: CancellationToken | None,
    ) -> list[PullRequest]:
        if not pull_requests:
            return []

        logger.info("-- %s has %d PRs to approve --", name, len(pull_requests))

        token = ensure_token(cancellation)
        sequence = _PacedSequence(self.pacer, delay, token)
        for pr in pull_requests:
            sequence.run(lambda pr=pr: self.approve(owner, name, pr, message, token))
        return list(pull_requests)

    def merge(
        self,
        owner: str,
        name: str,
        pull_request: PullRequest,
        message: str,
        cancellation: CancellationToken | None = None,
    ) -> None:
        """Squash-merge a single pull request with ``message`` as commit message."""
        logger.info("Merging PR #%d (%s)...", pull_request.number, message)
        self.client.merge_pull_request(
            owner, name, pull_request.number, message, cancellation=cancellation
        )
        logger.info("Merged PR #%d (%s)", pull_request.number, message)

    def merge_all(
        self,
        owner: str,
        name: str,
        message: str,
        author: str | None = None,
        window: DateWindow | None = None,
        delay: float = 0.0,
        cancellation: CancellationToken | None = None,
    ) -> list[PullRequest]:
        """Merge every open pull request; the first failure aborts the batch.

        Returns:
            The merged pull requests, in fetch order
        """
        token = ensure_token(cancellation)
        sequence = _PacedSequence(self.pacer, delay, token)
        return self._merge_repository(
            owner, name, message, author, window, False, sequence
        )

    def merge_all_with_passing_checks(
        self,
        owner: str,
        name: str,
        message: str,
        author: str | None = None,
        window: DateWindow | None = None,
        delay: float = 0.0,
        cancellation: CancellationToken | None = None,
    ) -> list[PullRequest]:
        """Merge open pull requests whose latest check runs did not fail.

        Pull requests with a failed run, or whose build status cannot be
        determined, are skipped and the batch continues. Merge failures still
        abort the batch.

        Returns:
            The merged pull requests, in fetch order
        """
        token = ensure_token(cancellation)
        sequence = _PacedSequence(self.pacer, delay, token)
        return self._merge_repository(
            owner, name, message, author, window, True, sequence
        )

    def merge_for_owner_incrementally(
        self,
        owner: str,
        message: str,
        check_passing_checks: bool = False,
        delay: float = 0.0,
        author: str | None = None,
        window: DateWindow | None = None,
        cancellation: CancellationToken | None = None,
    ) -> list[PullRequest]:
        """Merge eligible pull requests one repository at a time.

        Repositories are visited in the order returned by ``permute`` so that
        repeated runs spread API usage over all repositories instead of
        always draining the same first one. The pacing delay applies between
        every two merges, including across repository boundaries.

        Returns:
            All merged pull requests, in processing order
        """
        token = ensure_token(cancellation)
        logger.info("Merging PRs for owner (%s) repository by repository...", owner)

        repositories = self.permute(
            self.fetcher.list_repositories(owner, window, token)
        )
        sequence = _PacedSequence(self.pacer, delay, token)

        merged: list[PullRequest] = []
        for repository in repositories:
            merged.extend(
                self._merge_repository(
                    repository.owner,
                    repository.name,
                    message,
                    author,
                    window,
                    check_passing_checks,
                    sequence,
                )
            )

        logger.info(
            "Merged %d PRs across %d repositories", len(merged), len(repositories)
        )
        return merged

    def _merge_repository(
        self,
        owner: str,
        name: str,
        message: str,
        author: str | None,
        window: DateWindow | None,
        check_passing_checks: bool,
        sequence: _PacedSequence,
    ) -> list[PullRequest]:
        token = sequence.cancellation
        logger.info("Merging all PRs for %s/%s...", owner, name)

        pull_requests = self.fetcher.fetch_open_pull_requests(
            owner, name, author=author, window=window, cancellation=token
        )
        if not pull_requests:
            return []

        logger.info("-- %s has %d PRs open --", name, len(pull_requests))

        merged: list[PullRequest] = []
        for pr in pull_requests:
            if check_passing_checks and not self.checks_passing(
                owner, name, pr, token
            ):
                continue
            sequence.run(lambda pr=pr: self.merge(owner, name, pr, message, token))
            merged.append(pr)
        return merged

    def checks_passing(
        self,
        owner: str,
        name: str,
        pull_request: PullRequest,
        cancellation: CancellationToken | None = None,
    ) -> bool:
        """Whether a passing-checks merge would take ``pull_request``.

        False when its latest build failed or its build status cannot be
        determined. Cancellation propagates.
        """
        try:
            failed = self.build_status.has_failed_run_for(
                owner, name, pull_request, cancellation=cancellation
            )
        except OperationCancelledError:
            raise
        except Exception as e:
            logger.warning(
                "Skipping PR #%d: could not determine build status: %s",
                pull_request.number,
                e,
            )
            return False

        if failed:
            logger.warning(
                "Skipping PR #%d (%s): latest build failed",
                pull_request.number,
                pull_request.title,
            )
        return not failed
