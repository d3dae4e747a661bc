"""Tests for CLI commands."""

import pytest
from click.testing import CliRunner


def test_version_command():
    from tracker_mcp.cli import main

    runner = CliRunner()
    result = runner.invoke(main, ["version"])

    assert result.exit_code == 0
    assert "tracker-mcp v" in result.output


def test_providers_command():
    from tracker_mcp.cli import main

    runner = CliRunner()
    result = runner.invoke(main, ["providers"])

    assert result.exit_code == 0
    for key in ("redmine", "jira", "monday"):
        assert key in result.output


def test_capabilities_command(monkeypatch):
    from tracker_mcp.cli import main

    monkeypatch.setenv("TRACKER_PROVIDER", "monday")
    monkeypatch.setenv("TRACKER_API_KEY", "token")

    runner = CliRunner()
    result = runner.invoke(main, ["capabilities"])

    assert result.exit_code == 0
    assert "Provider: monday" in result.output
    assert "list_issues" in result.output
    assert "log_time" not in result.output


def test_capabilities_without_provider(monkeypatch):
    from tracker_mcp.cli import main

    monkeypatch.delenv("TRACKER_PROVIDER", raising=False)

    runner = CliRunner()
    result = runner.invoke(main, ["capabilities"])

    assert result.exit_code == 1
    assert "TRACKER_PROVIDER" in result.output
