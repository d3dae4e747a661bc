"""Tracker MCP - one MCP surface over Redmine, Jira Cloud and Monday.com."""

__version__ = "0.1.0"
