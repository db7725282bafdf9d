"""Configuration for the GitHub API connection and batch pacing."""

import os
from typing import Optional

DEFAULT_DELAY_SECONDS = 1.0


class TriageConfig:
    """Configuration class read from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        self.github_token: Optional[str] = os.getenv("GITHUB_TOKEN")
        self.github_api_url: Optional[str] = os.getenv("GITHUB_API_URL")
        self.delay: float = self._read_delay()

    @staticmethod
    def _read_delay() -> float:
        raw = os.getenv("PR_TRIAGE_DELAY")
        if raw is None or raw == "":
            return DEFAULT_DELAY_SECONDS
        try:
            value = float(raw)
        except ValueError:
            raise ValueError(
                f"PR_TRIAGE_DELAY must be a number of seconds, got '{raw}'"
            )
        if value < 0:
            raise ValueError("PR_TRIAGE_DELAY must not be negative")
        return value

    def is_configured(self) -> bool:
        """Check if the GitHub token is present."""
        return self.github_token is not None

    def validate(self) -> None:
        """Validate configuration and raise error if invalid."""
        if not self.github_token:
            raise ValueError(
                "Environment variables required for GitHub access: GITHUB_TOKEN"
            )
