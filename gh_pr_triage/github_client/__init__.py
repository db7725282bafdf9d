"""GitHub client package for API interaction."""

from .client import GitHubClient
from .models import (
    DateWindow,
    PullRequest,
    PullRequestState,
    Repository,
    Review,
    ReviewState,
    Run,
)
from .repositories import RepositoryEnumerator
from .runs import BuildStatusResolver

__all__ = [
    "GitHubClient",
    "RepositoryEnumerator",
    "BuildStatusResolver",
    "DateWindow",
    "PullRequest",
    "PullRequestState",
    "Repository",
    "Review",
    "ReviewState",
    "Run",
]
