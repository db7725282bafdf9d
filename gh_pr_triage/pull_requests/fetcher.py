"""Paginated retrieval of open pull requests with client-side filtering."""

import logging
from typing import TYPE_CHECKING

from ..github_client.models import DateWindow, PullRequest, Repository
from ..utils.pacing import CancellationToken

if TYPE_CHECKING:
    from ..github_client.client import GitHubClient
    from ..github_client.repositories import RepositoryEnumerator

logger = logging.getLogger(__name__)


def filter_by_window(
    pull_requests: list[PullRequest], window: DateWindow | None
) -> list[PullRequest]:
    """Keep pull requests created inside ``window`` (inclusive bounds).

    The pulls API has no creation-date query parameter, so this runs on
    each page after it is retrieved.
    """
    if window is None or window.is_unbounded:
        return list(pull_requests)
    return [pr for pr in pull_requests if window.contains(pr.created_at)]


def filter_by_author(
    pull_requests: list[PullRequest], author: str | None
) -> list[PullRequest]:
    """Keep pull requests opened by ``author`` (exact login match)."""
    if author is None:
        return list(pull_requests)
    return [pr for pr in pull_requests if pr.author == author]


class PullRequestFetcher:
    """Fetches open pull requests for one repository or a whole owner."""

    def __init__(
        self,
        client: "GitHubClient",
        enumerator: "RepositoryEnumerator | None" = None,
    ):
        """Initialize fetcher.

        Args:
            client: Authenticated GitHubClient instance
            enumerator: Repository enumerator, required for owner-wide fetches
        """
        self.client = client
        self.enumerator = enumerator

    def fetch_open_pull_requests(
        self,
        owner: str,
        name: str,
        author: str | None = None,
        window: DateWindow | None = None,
        log: bool = True,
        cancellation: CancellationToken | None = None,
    ) -> list[PullRequest]:
        """Fetch every open pull request of a repository, in API order.

        Pages are requested at the maximum page size until a page comes back
        empty or short. Errors from the API propagate to the caller.

        Args:
            owner: Repository owner
            name: Repository name
            author: Only keep pull requests opened by this login
            window: Only keep pull requests created inside this window
            log: Emit informational log events
            cancellation: Checked before every page request

        Returns:
            List of PullRequest objects, each open pull request at most once
        """
        if log:
            logger.debug("Getting all GitHub PRs for %s/%s...", owner, name)

        page_size = self.client.page_size
        result: list[PullRequest] = []
        page = 1

        while True:
            pull_requests = self.client.list_open_pull_requests(
                owner, name, page, cancellation=cancellation
            )
            if not pull_requests:
                break

            matching = filter_by_window(pull_requests, window)
            if log and window is not None and not window.is_unbounded:
                for pr in matching:
                    logger.info("PR #%d created at %s", pr.number, pr.created_at)
            result.extend(matching)

            if len(pull_requests) < page_size:
                break

            page += 1

        result = filter_by_author(result, author)

        if log:
            logger.debug("Fetched %d open PRs for %s/%s", len(result), owner, name)
        return result

    def fetch_open_pull_requests_for_repository(
        self,
        repository: Repository,
        author: str | None = None,
        window: DateWindow | None = None,
        log: bool = True,
        cancellation: CancellationToken | None = None,
    ) -> list[PullRequest]:
        return self.fetch_open_pull_requests(
            repository.owner,
            repository.name,
            author=author,
            window=window,
            log=log,
            cancellation=cancellation,
        )

    def list_repositories(
        self,
        owner: str,
        window: DateWindow | None = None,
        cancellation: CancellationToken | None = None,
    ) -> list[Repository]:
        """List the owner's repositories that may hold PRs inside ``window``.

        A repository created after the window ends cannot contain a pull
        request created inside it, so only the upper bound is applied.
        """
        if self.enumerator is None:
            raise ValueError("A RepositoryEnumerator is required for owner-wide calls")
        end_at = window.end_at if window is not None else None
        return self.enumerator.list_for_owner(
            owner, end_at=end_at, cancellation=cancellation
        )

    def fetch_for_owner(
        self,
        owner: str,
        author: str | None = None,
        window: DateWindow | None = None,
        log: bool = False,
        cancellation: CancellationToken | None = None,
    ) -> list[PullRequest]:
        """Fetch open pull requests across every repository of ``owner``."""
        if log:
            logger.info("Getting all GitHub PRs for owner (%s)...", owner)

        result: list[PullRequest] = []
        for repository in self.list_repositories(owner, window, cancellation):
            result.extend(
                self.fetch_open_pull_requests_for_repository(
                    repository,
                    author=author,
                    window=window,
                    log=log,
                    cancellation=cancellation,
                )
            )
        return result
