"""Pydantic models for GitHub data structures.

These are the canonical value types passed through the triage core. They map
to GitHub's REST API v3 response structures, trimmed to the fields we use.
API Reference: https://docs.github.com/en/rest/pulls
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def ensure_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Repository(BaseModel):
    """GitHub repository identified by (owner, name).

    Maps to GitHub REST API Repository object.
    API Reference: https://docs.github.com/en/rest/repos/repos
    """

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., description="Login of the owning user or organization")
    name: str = Field(..., description="Repository name without the owner prefix")
    full_name: str = Field(..., description="'owner/name' (string)")
    default_branch: str | None = Field(None, description="Default branch name")
    created_at: datetime | None = Field(
        None, description="Timestamp of repository creation (ISO 8601)"
    )

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)

    @property
    def key(self) -> tuple[str, str]:
        return (self.owner, self.name)

    @classmethod
    def from_wire(cls, raw: Any) -> "Repository":
        """Normalize either repository shape returned by GitHub.

        Accepts a PyGitHub ``Repository`` (the full REST shape) or a mapping
        in the minimal shape embedded in other payloads, where only ``name``,
        ``full_name`` and ``owner.login`` are guaranteed.
        """
        if isinstance(raw, cls):
            return raw

        if isinstance(raw, Mapping):
            owner = raw.get("owner")
            owner_login = owner.get("login") if isinstance(owner, Mapping) else owner
            full_name = raw.get("full_name")
            if owner_login is None and full_name:
                owner_login = full_name.split("/", 1)[0]
            return cls.model_validate(
                {
                    "owner": owner_login,
                    "name": raw.get("name"),
                    "full_name": full_name or f"{owner_login}/{raw.get('name')}",
                    "default_branch": raw.get("default_branch"),
                    "created_at": raw.get("created_at"),
                }
            )

        return cls(
            owner=raw.owner.login,
            name=raw.name,
            full_name=raw.full_name,
            default_branch=raw.default_branch,
            created_at=raw.created_at,
        )


class PullRequestState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"


class PullRequest(BaseModel):
    """GitHub pull request identified by (repository, number).

    Maps to GitHub REST API Pull Request object.
    API Reference: https://docs.github.com/en/rest/pulls/pulls
    """

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., description="Owner login of the base repository")
    repository: str = Field(..., description="Name of the base repository")
    number: int = Field(..., description="Pull request number within the repository")
    title: str = Field(..., description="Title of the pull request (string)")
    author: str = Field(..., description="Login of the user who opened it")
    created_at: datetime = Field(
        ..., description="Timestamp of pull request creation (ISO 8601)"
    )
    state: PullRequestState = Field(
        PullRequestState.OPEN, description="Current state: open, closed or merged"
    )
    head_sha: str | None = Field(None, description="SHA of the head commit")

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repository}#{self.number}"


class ReviewState(str, Enum):
    """Review states reported by the pull request reviews API."""

    APPROVED = "APPROVED"
    COMMENTED = "COMMENTED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    DISMISSED = "DISMISSED"
    PENDING = "PENDING"


class Review(BaseModel):
    """Pull request review.

    API Reference: https://docs.github.com/en/rest/pulls/reviews
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique review identifier (integer)")
    author: str | None = Field(None, description="Login of the reviewer")
    state: ReviewState = Field(..., description="Review state")

    @field_validator("state", mode="before")
    @classmethod
    def _upper_state(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


FAILED_CONCLUSIONS = frozenset({"failure", "timed_out"})


class Run(BaseModel):
    """Check run attached to a commit.

    API Reference: https://docs.github.com/en/rest/checks/runs
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Name of the check")
    status: str = Field(..., description="queued, in_progress or completed")
    conclusion: str | None = Field(
        None, description="success, failure, neutral, cancelled, timed_out, ..."
    )
    started_at: datetime | None = Field(None, description="When the run started")
    completed_at: datetime | None = Field(None, description="When the run completed")

    @field_validator("started_at", "completed_at")
    @classmethod
    def _timestamps_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)

    @property
    def failed(self) -> bool:
        return self.conclusion in FAILED_CONCLUSIONS


class DateWindow(BaseModel):
    """Creation-date window; both bounds optional and inclusive."""

    model_config = ConfigDict(frozen=True)

    start_at: datetime | None = None
    end_at: datetime | None = None

    @field_validator("start_at", "end_at")
    @classmethod
    def _bounds_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _check_order(self) -> "DateWindow":
        if (
            self.start_at is not None
            and self.end_at is not None
            and self.start_at > self.end_at
        ):
            raise ValueError("start_at must not be after end_at")
        return self

    @property
    def is_unbounded(self) -> bool:
        """True when neither bound is set."""
        return self.start_at is None and self.end_at is None

    def contains(self, value: datetime) -> bool:
        value = ensure_utc(value)  # type: ignore[assignment]
        if self.start_at is not None and value < self.start_at:
            return False
        if self.end_at is not None and value > self.end_at:
            return False
        return True
