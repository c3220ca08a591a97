"""Tests for the CLI module."""

from __future__ import annotations

from unittest.mock import patch

from click.testing import CliRunner

from readme_cards.cli import main
from readme_cards.errors import InputError
from readme_cards.layout import Layout


def _close(coro):
    coro.close()


@patch("readme_cards.cli.asyncio.run", side_effect=_close)
@patch("readme_cards.orchestrator.run")
def test_main_builds_options(mock_run, mock_asyncio_run):
    """CLI should turn flags into clamped card options."""
    runner = CliRunner()
    result = runner.invoke(main, [
        "octocat", "--token", "fake-token",
        "--layout", "PIE",
        "--langs-count", "42",
        "--hide", "html,css",
        "--hide", "shell",
        "--exclude-repo", "dotfiles*",
        "--card-width", "100",
        "--count-private",
        "--locale", "de",
    ])
    assert result.exit_code == 0, result.output
    mock_asyncio_run.assert_called_once()
    kwargs = mock_run.call_args.kwargs
    options = kwargs["options"]
    assert kwargs["username"] == "octocat"
    assert kwargs["token"] == "fake-token"
    assert kwargs["output_format"] == "svg"
    assert options.layout is Layout.PIE
    assert options.langs_count == 10
    assert options.hide == ["html", "css", "shell"]
    assert options.exclude_repo == ["dotfiles*"]
    assert options.card_width == 230
    assert options.count_private is True
    assert options.include_all_commits is False
    assert options.locale == "de"


@patch("readme_cards.cli.asyncio.run", side_effect=_close)
def test_main_with_output_option(mock_asyncio_run):
    """CLI should accept --output and --format."""
    runner = CliRunner()
    result = runner.invoke(main, [
        "octocat", "--token", "fake-token",
        "--format", "json",
        "--output", "/tmp/test-output.json",
    ])
    assert result.exit_code == 0
    mock_asyncio_run.assert_called_once()


@patch("readme_cards.cli.asyncio.run", side_effect=_close)
def test_main_token_from_env(mock_asyncio_run):
    runner = CliRunner(env={"GITHUB_TOKEN": "env-token"})
    result = runner.invoke(main, ["octocat"])
    assert result.exit_code == 0


def test_main_missing_token():
    """CLI should fail without token."""
    runner = CliRunner(env={"GITHUB_TOKEN": ""})
    result = runner.invoke(main, ["octocat"], catch_exceptions=False)
    assert result.exit_code != 0


def test_main_rejects_unknown_layout():
    runner = CliRunner()
    result = runner.invoke(main, ["octocat", "--token", "fake-token", "--layout", "bars"])
    assert result.exit_code != 0


@patch("readme_cards.cli.asyncio.run")
def test_main_reports_card_errors(mock_asyncio_run):
    """Card errors should exit non-zero with a message, not a traceback."""
    def fail(coro):
        coro.close()
        raise InputError("Invalid username")

    mock_asyncio_run.side_effect = fail
    runner = CliRunner()
    result = runner.invoke(main, ["octocat", "--token", "fake-token"])
    assert result.exit_code == 1
    assert "Invalid username" in result.output


def test_main_version():
    """CLI should show version."""
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "version" in result.output.lower() or "." in result.output
