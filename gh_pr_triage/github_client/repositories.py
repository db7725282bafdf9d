"""Repository enumeration for an owner, with an optional creation-date window."""

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from ..utils.pacing import CancellationToken
from .models import DateWindow, Repository

if TYPE_CHECKING:
    from .client import GitHubClient

logger = logging.getLogger(__name__)


class RepositoryEnumerator:
    """Lists the repositories owned by an account."""

    def __init__(self, client: "GitHubClient"):
        self.client = client

    def list_for_owner(
        self,
        owner: str,
        start_at: datetime | None = None,
        end_at: datetime | None = None,
        cancellation: CancellationToken | None = None,
    ) -> list[Repository]:
        """List repositories created within ``[start_at, end_at]``.

        Either bound may be omitted. Repositories whose creation time is
        unknown (minimal API shape) are always kept.
        """
        window = DateWindow(start_at=start_at, end_at=end_at)
        repositories = self.client.list_repositories(owner, cancellation=cancellation)

        if window.is_unbounded:
            result = repositories
        else:
            result = [
                repo
                for repo in repositories
                if repo.created_at is None or window.contains(repo.created_at)
            ]

        logger.debug(
            "Found %d repositories for %s (%d in window)",
            len(repositories),
            owner,
            len(result),
        )
        return result
