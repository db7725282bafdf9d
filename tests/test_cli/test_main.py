"""Test main CLI functionality."""

from unittest.mock import patch

from typer.testing import CliRunner

from gh_pr_triage.cli.main import app

runner = CliRunner(env={"NO_COLOR": "1", "TERM": "dumb"})


def test_version_command() -> None:
    """Test version command."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "GitHub PR Triage v" in result.stdout


def test_rate_limit_command() -> None:
    """Test rate limit reporting."""
    with patch("gh_pr_triage.cli.main.GitHubClient") as mock_client_class:
        mock_client_class.return_value.get_rate_limit_remaining.return_value = 4321
        result = runner.invoke(app, ["rate-limit", "--token", "abc"])

    assert result.exit_code == 0
    assert "4321 requests remaining" in result.stdout
    mock_client_class.assert_called_once_with(token="abc")


def test_rate_limit_without_token() -> None:
    """Test that a missing token is reported as an error."""
    with patch("gh_pr_triage.cli.main.GitHubClient") as mock_client_class:
        mock_client_class.side_effect = ValueError("GitHub token is required.")
        result = runner.invoke(app, ["rate-limit"])

    assert result.exit_code == 1
    assert "GitHub token is required" in result.stdout
