"""Issue commands: list, view, search and the three mutations."""

from __future__ import annotations

import json
import logging
from functools import partial
from typing import Optional

import typer

from jiractl.adapters.jira_adapter import JiraAdapterError
from jiractl.cli.commands import _common
from jiractl.cli.commands._common import JSON_HELP, _error, emit, normalize_key, require_positive
from jiractl.core.models import AssignResult, CommentResult, TransitionResult
from jiractl.core.transitions import EmptyQueryError, NoMatchError, match_transition
from jiractl.core.views import browse_url, issue_list_view, issue_reporter, issue_to_detail_view
from jiractl.render import (
    render_assign_result,
    render_comment_result,
    render_issue_detail,
    render_issue_list,
    render_transition_result,
)

logger = logging.getLogger("jiractl")

app = typer.Typer(no_args_is_help=True, help="Query and update issues.")

DEFAULT_LIMIT = 50
DEFAULT_COMMENT_LIMIT = 20


def mine_jql(status: str | None = None) -> str:
    """JQL for issues assigned to the current user, newest activity first."""
    if status:
        return f"assignee = currentUser() AND status = {json.dumps(status)} ORDER BY updated DESC"
    return "assignee = currentUser() ORDER BY updated DESC"


def _search(jql: str, limit: int, json_out: bool, heading: str, empty_message: str) -> None:
    cfg = _common.require_config()
    try:
        result = _common.build_adapter(cfg).search_issues(jql, limit)
    except JiraAdapterError as exc:
        _error(str(exc), 1)

    emit(
        issue_list_view(result, cfg.server),
        json_out,
        partial(render_issue_list, heading=heading, empty_message=empty_message),
    )


@app.command("mine")
def mine(
    limit: int = typer.Option(DEFAULT_LIMIT, "--limit", help="Max issues to return."),
    status: Optional[str] = typer.Option(
        None, "--status", help='Filter by status (e.g. "In Progress").'
    ),
    json_out: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """List issues assigned to you."""
    require_positive(limit, "--limit")
    _search(
        mine_jql(status),
        limit,
        json_out,
        heading="Assigned issues",
        empty_message="No issues assigned to you.",
    )


@app.command("search")
def search(
    jql: str = typer.Option("", "--jql", help='JQL query (e.g. "project = PROJ").'),
    limit: int = typer.Option(DEFAULT_LIMIT, "--limit", help="Max issues to return."),
    json_out: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Search issues with JQL."""
    if not jql.strip():
        _error('--jql is required (e.g. --jql "project = PROJ")', 2)
    require_positive(limit, "--limit")
    _search(jql, limit, json_out, heading="Issues", empty_message="No issues found.")


@app.command("view")
def view(
    key: str = typer.Argument(..., help="Issue key (e.g. PROJ-123)."),
    comment_limit: int = typer.Option(
        DEFAULT_COMMENT_LIMIT, "--comment-limit", help="Max comments to return."
    ),
    json_out: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """View a single issue with its description and recent comments."""
    require_positive(comment_limit, "--comment-limit")
    issue_key = normalize_key(key)
    cfg = _common.require_config()
    adapter = _common.build_adapter(cfg)
    try:
        issue = adapter.get_issue(issue_key)
        comments = adapter.get_comments(issue_key, comment_limit)
    except JiraAdapterError as exc:
        _error(str(exc), 1)

    emit(issue_to_detail_view(issue, cfg.server, comments), json_out, render_issue_detail)


@app.command("transition")
def transition(
    key: str = typer.Argument(..., help="Issue key (e.g. PROJ-123)."),
    status: str = typer.Option("", "--status", help="Target status or transition name."),
    json_out: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Move an issue to a new status, matching the name loosely."""
    issue_key = normalize_key(key)
    if not status.strip():
        _error('--status is required (e.g. --status "In Progress")', 2)

    cfg = _common.require_config()
    adapter = _common.build_adapter(cfg)
    try:
        transitions = adapter.get_transitions(issue_key)
        outcome = match_transition(transitions, status)
        logger.debug(
            "Matched %r to transition %s (%s) by %s",
            status,
            outcome.selected.id,
            outcome.selected.name,
            outcome.matched_by.value,
        )
        adapter.apply_transition(issue_key, outcome.selected.id)
    except (EmptyQueryError, NoMatchError, JiraAdapterError) as exc:
        _error(str(exc), 1)

    result = TransitionResult(
        key=issue_key,
        status=outcome.selected.name,
        matched_by=outcome.matched_by.value,
        warning=outcome.ambiguity_warning or "",
        url=browse_url(cfg.server, issue_key),
    )
    if result.warning and not json_out:
        typer.echo(f"warning: {result.warning}", err=True)
    emit(result, json_out, render_transition_result)


@app.command("assign")
def assign(
    key: str = typer.Argument(..., help="Issue key (e.g. PROJ-123)."),
    email: Optional[str] = typer.Option(
        None, "--email", help="Assignee email (defaults to the reporter)."
    ),
    json_out: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Reassign an issue to a user, or back to its reporter."""
    issue_key = normalize_key(key)
    cfg = _common.require_config()
    adapter = _common.build_adapter(cfg)

    try:
        if email:
            users = adapter.search_users(email)
            if not users:
                _error(f'no user found for "{email}"', 1)
            user = users[0]
            if not user.get("accountId"):
                _error(f'user found for "{email}" has no account id', 1)
        else:
            reporter = issue_reporter(adapter.get_issue(issue_key))
            if reporter is None:
                _error("issue has no reporter; use --email to specify an assignee", 1)
            user = reporter
        adapter.assign_issue(issue_key, str(user["accountId"]))
    except JiraAdapterError as exc:
        _error(str(exc), 1)

    result = AssignResult(
        key=issue_key,
        assignee=str(user.get("emailAddress") or ""),
        assignee_name=str(user.get("displayName") or ""),
        url=browse_url(cfg.server, issue_key),
    )
    emit(result, json_out, render_assign_result)


@app.command("comment")
def comment(
    key: str = typer.Argument(..., help="Issue key (e.g. PROJ-123)."),
    body: str = typer.Option("", "--body", help="Comment text."),
    json_out: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Add a plain-text comment to an issue."""
    issue_key = normalize_key(key)
    if not body:
        _error("--body is required", 2)

    cfg = _common.require_config()
    try:
        _common.build_adapter(cfg).add_comment(issue_key, body)
    except JiraAdapterError as exc:
        _error(str(exc), 1)

    result = CommentResult(key=issue_key, comment=body, url=browse_url(cfg.server, issue_key))
    emit(result, json_out, render_comment_result)
