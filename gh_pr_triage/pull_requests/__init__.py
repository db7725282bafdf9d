"""Pull request retrieval, approval state, filtering and batch actions."""

from .actions import BatchActionOrchestrator
from .approvals import ApprovalResolver
from .fetcher import PullRequestFetcher, filter_by_author, filter_by_window
from .filters import RepositoryFilter

__all__ = [
    "ApprovalResolver",
    "BatchActionOrchestrator",
    "PullRequestFetcher",
    "RepositoryFilter",
    "filter_by_author",
    "filter_by_window",
]
