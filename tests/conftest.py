"""Test configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from gh_pr_triage.github_client.models import PullRequest, Repository

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def make_pr() -> Callable[..., PullRequest]:
    """Factory for pull requests in test-org/test-repo."""

    def _make(
        number: int,
        author: str = "octocat",
        created_at: datetime | None = None,
        owner: str = "test-org",
        repository: str = "test-repo",
        head_sha: str | None = None,
    ) -> PullRequest:
        return PullRequest(
            owner=owner,
            repository=repository,
            number=number,
            title=f"PR {number}",
            author=author,
            created_at=created_at or BASE_TIME + timedelta(days=number),
            head_sha=head_sha if head_sha is not None else f"sha{number}",
        )

    return _make


@pytest.fixture
def make_repo() -> Callable[..., Repository]:
    """Factory for repositories owned by test-org."""

    def _make(name: str, owner: str = "test-org") -> Repository:
        return Repository(
            owner=owner,
            name=name,
            full_name=f"{owner}/{name}",
            default_branch="main",
            created_at=BASE_TIME,
        )

    return _make


@pytest.fixture
def mock_client() -> MagicMock:
    """GitHubClient double with the real page size."""
    client = MagicMock()
    client.page_size = 100
    return client


@pytest.fixture
def paged() -> Callable[..., Callable[..., list]]:
    """Build a list_open_pull_requests side_effect serving ``items`` in pages."""

    def _paged(items: list, page_size: int = 100) -> Callable[..., list]:
        def _page(owner: str, name: str, page: int, cancellation=None) -> list:
            start = (page - 1) * page_size
            return items[start : start + page_size]

        return _page

    return _paged
