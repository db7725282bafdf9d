"""Wiring of the triage components around one GitHub client."""

from dataclasses import dataclass

from .config import TriageConfig
from .github_client.client import GitHubClient
from .github_client.repositories import RepositoryEnumerator
from .github_client.runs import BuildStatusResolver
from .pull_requests.actions import BatchActionOrchestrator
from .pull_requests.approvals import ApprovalResolver
from .pull_requests.fetcher import PullRequestFetcher
from .pull_requests.filters import RepositoryFilter
from .utils.pacing import Pacer


@dataclass
class TriageServices:
    client: GitHubClient
    fetcher: PullRequestFetcher
    approvals: ApprovalResolver
    build_status: BuildStatusResolver
    filters: RepositoryFilter
    actions: BatchActionOrchestrator


def create_services(
    config: TriageConfig | None = None,
    token: str | None = None,
    pacer: Pacer | None = None,
) -> TriageServices:
    """Build every component on top of a single authenticated client.

    Args:
        config: Environment configuration (read fresh when None)
        token: Overrides the configured GitHub token
        pacer: Overrides the default fixed-delay pacer
    """
    config = config or TriageConfig()
    client = GitHubClient(
        token=token or config.github_token, base_url=config.github_api_url
    )

    enumerator = RepositoryEnumerator(client)
    fetcher = PullRequestFetcher(client, enumerator)
    approvals = ApprovalResolver(client, fetcher)
    build_status = BuildStatusResolver(client)

    return TriageServices(
        client=client,
        fetcher=fetcher,
        approvals=approvals,
        build_status=build_status,
        filters=RepositoryFilter(fetcher, build_status),
        actions=BatchActionOrchestrator(
            client, fetcher, approvals, build_status, pacer=pacer
        ),
    )
