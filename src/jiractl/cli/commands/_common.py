"""Helpers shared by CLI commands."""

from __future__ import annotations

import logging
from typing import Callable, NoReturn

import typer

from jiractl.adapters.config_store import NotAuthenticatedError, load_auth_config
from jiractl.adapters.jira_adapter import JiraIssueSource
from jiractl.adapters.jira_rest import JiraRestAdapter
from jiractl.core.models import JiraConfig
from jiractl.render import render_json

logger = logging.getLogger("jiractl")

JSON_HELP = "Print JSON for agents and scripts."


def _error(message: str, exit_code: int) -> NoReturn:
    """Print error to stderr and exit."""
    logger.debug("Exiting with code %d: %s", exit_code, message)
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=exit_code)


def build_adapter(config: JiraConfig) -> JiraIssueSource:
    """Create the issue source used by commands."""
    return JiraRestAdapter(config)


def require_config() -> JiraConfig:
    """Load credentials or exit with a login hint."""
    try:
        return load_auth_config()
    except NotAuthenticatedError as exc:
        _error(str(exc), 1)
    except (ValueError, OSError) as exc:
        _error(f"Config error: {exc}", 1)


def normalize_key(key: str) -> str:
    return key.strip().upper()


def require_positive(value: int, flag: str) -> None:
    if value <= 0:
        _error(f"{flag} must be greater than 0", 2)


def emit(result: object, as_json: bool, render_text: Callable[..., str]) -> None:
    """Write a result either as JSON or through its text renderer."""
    if as_json:
        typer.echo(render_json(result), nl=False)
    else:
        typer.echo(render_text(result), nl=False)
