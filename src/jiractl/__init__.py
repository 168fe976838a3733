"""Jira Cloud CLI with compact, agent-friendly output."""

from jiractl.version import __version__

__all__ = ["__version__"]
