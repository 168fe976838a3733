"""Auth commands: login, status and logout."""

from __future__ import annotations

from typing import Optional

import typer
from pydantic import ValidationError

from jiractl.adapters import config_store
from jiractl.adapters.jira_adapter import JiraAdapterError
from jiractl.cli.commands import _common
from jiractl.cli.commands._common import JSON_HELP, _error, emit
from jiractl.core.models import AuthStatus, JiraConfig
from jiractl.render import render_auth_status

app = typer.Typer(no_args_is_help=True, help="Manage stored Jira credentials.")


@app.command("login")
def login(
    server: Optional[str] = typer.Option(
        None,
        "--server",
        envvar=config_store.ENV_SERVER,
        help="Jira Cloud server URL (e.g. https://company.atlassian.net).",
    ),
    email: Optional[str] = typer.Option(
        None, "--email", envvar=config_store.ENV_EMAIL, help="Jira account email."
    ),
    token: Optional[str] = typer.Option(
        None, "--token", envvar=config_store.ENV_API_TOKEN, help="Jira API token."
    ),
) -> None:
    """Verify credentials against the server and store them."""
    server = (server or "").strip().rstrip("/")
    email = (email or "").strip()
    token = (token or "").strip()
    if not server:
        _error(f"--server is required (or set {config_store.ENV_SERVER})", 2)
    if not email:
        _error(f"--email is required (or set {config_store.ENV_EMAIL})", 2)
    if not token:
        _error(f"--token is required (or set {config_store.ENV_API_TOKEN})", 2)

    try:
        cfg = JiraConfig(server=server, email=email, api_token=token)
    except ValidationError as exc:
        _error(f"Invalid credentials: {exc}", 2)

    try:
        user = _common.build_adapter(cfg).get_myself()
    except JiraAdapterError as exc:
        _error(f"auth verification failed for {cfg.server}: {exc}", 1)

    try:
        config_store.save_config(cfg)
    except OSError as exc:
        _error(f"failed to save config: {exc}", 1)

    display_name = user.get("displayName") or email
    typer.echo(f"Authenticated as {display_name} ({email}) on {cfg.server}")


@app.command("status")
def status(
    json_out: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Show the credentials currently in effect."""
    cfg = _common.require_config()
    emit(
        AuthStatus(authenticated=True, server=cfg.server, email=cfg.email),
        json_out,
        render_auth_status,
    )


@app.command("logout")
def logout() -> None:
    """Remove stored credentials."""
    try:
        removed = config_store.delete_config()
    except OSError as exc:
        _error(f"failed to remove config: {exc}", 1)
    if removed:
        typer.echo("Logged out. Config removed.")
    else:
        typer.echo("Already logged out.")
