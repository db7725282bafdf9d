"""GitHub API client using PyGitHub."""

import logging
import os

from github import Github
from github.CheckRun import CheckRun
from github.Consts import DEFAULT_BASE_URL
from github.GithubException import UnknownObjectException
from github.PullRequest import PullRequest as GithubPullRequest
from github.PullRequestReview import PullRequestReview
from github.Repository import Repository as GithubRepository

from ..utils.pacing import CancellationToken, ensure_token
from .models import PullRequest, PullRequestState, Repository, Review, Run

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
"""GitHub's maximum ``per_page`` for list endpoints."""

MERGE_METHOD = "squash"


class GitHubClient:
    """Authenticated GitHub API client returning canonical models.

    Exceptions raised by PyGitHub (``GithubException`` and subclasses) are
    not caught here; callers decide whether an error aborts their batch.
    """

    def __init__(self, token: str | None = None, base_url: str | None = None):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
            base_url: API base URL for GitHub Enterprise. If None, reads from
                GITHUB_API_URL env var, falling back to api.github.com.
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.base_url = base_url or os.getenv("GITHUB_API_URL") or DEFAULT_BASE_URL
        self.github = Github(
            self.token, base_url=self.base_url, per_page=MAX_PAGE_SIZE
        )

    @property
    def page_size(self) -> int:
        return MAX_PAGE_SIZE

    def _repo(self, owner: str, name: str) -> GithubRepository:
        # lazy: no request until an endpoint below the repository is called
        return self.github.get_repo(f"{owner}/{name}", lazy=True)

    def _convert_pull_request(
        self, owner: str, name: str, github_pr: GithubPullRequest
    ) -> PullRequest:
        """Convert PyGitHub pull request to our model."""
        if github_pr.state == "closed" and github_pr.merged_at is not None:
            state = PullRequestState.MERGED
        else:
            state = PullRequestState(github_pr.state)

        return PullRequest(
            owner=owner,
            repository=name,
            number=github_pr.number,
            title=github_pr.title,
            author=github_pr.user.login,
            created_at=github_pr.created_at,
            state=state,
            head_sha=github_pr.head.sha if github_pr.head else None,
        )

    def _convert_review(self, github_review: PullRequestReview) -> Review:
        """Convert PyGitHub review to our model."""
        return Review(
            id=github_review.id,
            author=github_review.user.login if github_review.user else None,
            state=github_review.state,
        )

    def _convert_run(self, github_run: CheckRun) -> Run:
        """Convert PyGitHub check run to our model."""
        return Run(
            name=github_run.name,
            status=github_run.status,
            conclusion=github_run.conclusion,
            started_at=github_run.started_at,
            completed_at=github_run.completed_at,
        )

    def get_repository(self, owner: str, name: str) -> Repository:
        """Get a single repository."""
        try:
            return Repository.from_wire(self.github.get_repo(f"{owner}/{name}"))
        except UnknownObjectException:
            raise ValueError(f"Repository {owner}/{name} not found")

    def list_repositories(
        self, owner: str, cancellation: CancellationToken | None = None
    ) -> list[Repository]:
        """List every repository of an organization, or of a user account.

        Args:
            owner: Organization or user login
            cancellation: Checked before each request

        Returns:
            Repositories normalized to the canonical model
        """
        token = ensure_token(cancellation)
        token.raise_if_cancelled()

        try:
            github_repos = self.github.get_organization(owner).get_repos(type="all")
            return [Repository.from_wire(repo) for repo in github_repos]
        except UnknownObjectException:
            logger.debug("%s is not an organization, listing user repositories", owner)

        token.raise_if_cancelled()
        github_repos = self.github.get_user(owner).get_repos()
        return [Repository.from_wire(repo) for repo in github_repos]

    def list_open_pull_requests(
        self,
        owner: str,
        name: str,
        page: int,
        cancellation: CancellationToken | None = None,
    ) -> list[PullRequest]:
        """Get one page of open pull requests.

        Args:
            owner: Repository owner
            name: Repository name
            page: 1-based page number; pages hold ``page_size`` items
            cancellation: Checked before the request

        Returns:
            Pull requests on that page, possibly empty
        """
        ensure_token(cancellation).raise_if_cancelled()

        paginated = self._repo(owner, name).get_pulls(state="open")
        # PaginatedList pages are 0-based
        return [
            self._convert_pull_request(owner, name, github_pr)
            for github_pr in paginated.get_page(page - 1)
        ]

    def get_pull_request(
        self,
        owner: str,
        name: str,
        number: int,
        cancellation: CancellationToken | None = None,
    ) -> PullRequest:
        """Get a single pull request."""
        ensure_token(cancellation).raise_if_cancelled()

        github_pr = self._repo(owner, name).get_pull(number)
        return self._convert_pull_request(owner, name, github_pr)

    def list_reviews(
        self,
        owner: str,
        name: str,
        number: int,
        cancellation: CancellationToken | None = None,
    ) -> list[Review]:
        """Get every review submitted on a pull request."""
        token = ensure_token(cancellation)
        token.raise_if_cancelled()

        github_pr = self._repo(owner, name).get_pull(number)
        token.raise_if_cancelled()
        return [self._convert_review(review) for review in github_pr.get_reviews()]

    def create_approving_review(
        self,
        owner: str,
        name: str,
        number: int,
        message: str,
        cancellation: CancellationToken | None = None,
    ) -> None:
        """Submit an APPROVE review with ``message`` as its body."""
        token = ensure_token(cancellation)
        token.raise_if_cancelled()

        github_pr = self._repo(owner, name).get_pull(number)
        token.raise_if_cancelled()
        github_pr.create_review(body=message, event="APPROVE")

    def merge_pull_request(
        self,
        owner: str,
        name: str,
        number: int,
        message: str,
        cancellation: CancellationToken | None = None,
    ) -> None:
        """Squash-merge a pull request using ``message`` as the commit message."""
        token = ensure_token(cancellation)
        token.raise_if_cancelled()

        github_pr = self._repo(owner, name).get_pull(number)
        token.raise_if_cancelled()
        github_pr.merge(commit_message=message, merge_method=MERGE_METHOD)

    def list_check_runs(
        self,
        owner: str,
        name: str,
        sha: str,
        cancellation: CancellationToken | None = None,
    ) -> list[Run]:
        """Get the check runs reported for a commit."""
        token = ensure_token(cancellation)
        token.raise_if_cancelled()

        commit = self._repo(owner, name).get_commit(sha)
        token.raise_if_cancelled()
        return [self._convert_run(run) for run in commit.get_check_runs()]

    def get_rate_limit_remaining(self) -> int:
        """Return the number of core API requests left in the current window."""
        rate_limit = self.github.get_rate_limit()
        return rate_limit.rate.remaining
