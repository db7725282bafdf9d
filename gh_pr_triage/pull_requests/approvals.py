"""Approval state of pull requests."""

import logging
from typing import TYPE_CHECKING

from ..github_client.models import DateWindow, PullRequest, ReviewState
from ..utils.pacing import CancellationToken

if TYPE_CHECKING:
    from ..github_client.client import GitHubClient
    from .fetcher import PullRequestFetcher

logger = logging.getLogger(__name__)


class ApprovalResolver:
    """Answers whether pull requests already carry an approving review."""

    def __init__(self, client: "GitHubClient", fetcher: "PullRequestFetcher"):
        self.client = client
        self.fetcher = fetcher

    def is_approved(
        self,
        owner: str,
        repo: str,
        number: int,
        cancellation: CancellationToken | None = None,
    ) -> bool:
        """Return True if any review on the pull request was ever APPROVED.

        Later dismissals or changes-requested reviews do not clear an earlier
        approval. An empty review list means not approved.
        """
        reviews = self.client.list_reviews(
            owner, repo, number, cancellation=cancellation
        )
        return any(review.state == ReviewState.APPROVED for review in reviews)

    def get_all_non_approved(
        self,
        owner: str,
        name: str,
        author: str | None = None,
        window: DateWindow | None = None,
        log: bool = True,
        cancellation: CancellationToken | None = None,
    ) -> list[PullRequest]:
        """Open pull requests without an approving review, in fetch order."""
        if log:
            logger.info(
                "Getting all non-approved GitHub PRs for repo (%s/%s)...", owner, name
            )

        pull_requests = self.fetcher.fetch_open_pull_requests(
            owner,
            name,
            author=author,
            window=window,
            log=log,
            cancellation=cancellation,
        )
        return [
            pr
            for pr in pull_requests
            if not self.is_approved(owner, name, pr.number, cancellation=cancellation)
        ]

    def get_all_non_approved_for_owner(
        self,
        owner: str,
        author: str | None = None,
        window: DateWindow | None = None,
        log: bool = True,
        cancellation: CancellationToken | None = None,
    ) -> list[PullRequest]:
        """Non-approved open pull requests across every repository of ``owner``."""
        if log:
            logger.info("Getting all non-approved GitHub PRs for owner (%s)...", owner)

        result: list[PullRequest] = []
        for repository in self.fetcher.list_repositories(owner, window, cancellation):
            result.extend(
                self.get_all_non_approved(
                    repository.owner,
                    repository.name,
                    author=author,
                    window=window,
                    log=log,
                    cancellation=cancellation,
                )
            )
        return result
