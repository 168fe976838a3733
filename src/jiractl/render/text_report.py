"""Line-oriented text renderers for human readers."""

from __future__ import annotations

from jiractl.core.models import (
    AssignResult,
    AuthStatus,
    CommentResult,
    IssueDetailView,
    IssueListView,
    TransitionResult,
)


def render_issue_list(
    view: IssueListView,
    *,
    heading: str = "Issues",
    empty_message: str = "No issues found.",
) -> str:
    """One line per issue under a count heading."""
    if not view.issues:
        return empty_message + "\n"

    if view.total > view.count or view.has_more:
        lines = [f"{heading} ({view.count} of {view.total}):"]
    else:
        lines = [f"{heading} ({view.count}):"]
    for issue in view.issues:
        lines.append(f"- {issue.key:<12}  [{issue.status}]  {issue.summary}")
    return "\n".join(lines) + "\n"


def render_issue_detail(view: IssueDetailView) -> str:
    """Labelled fields, then description and comments when present."""
    rows = [
        ("Key", view.key),
        ("Summary", view.summary),
        ("Status", view.status),
        ("Type", view.type),
        ("Priority", view.priority),
        ("Assignee", view.assignee),
        ("Created", view.created),
        ("Updated", view.updated),
        ("URL", view.url),
    ]
    lines = [f"{label + ':':<13}{value}" for label, value in rows]

    if view.description:
        lines.extend(["", "Description:", view.description])
    if view.comments:
        lines.extend(["", f"Comments ({len(view.comments)}):"])
        for comment in view.comments:
            lines.extend(["", f"  {comment.author} ({comment.created}):", f"  {comment.body}"])
    return "\n".join(lines) + "\n"


def render_transition_result(result: TransitionResult) -> str:
    return f"{result.key} transitioned to {result.status}\n"


def render_assign_result(result: AssignResult) -> str:
    if result.assignee_name and result.assignee:
        target = f"{result.assignee_name} ({result.assignee})"
    else:
        target = result.assignee_name or result.assignee
    return f"{result.key} assigned to {target}\n"


def render_comment_result(result: CommentResult) -> str:
    return f"Comment added to {result.key}\n"


def render_auth_status(status: AuthStatus) -> str:
    return (
        f"Authenticated: {'yes' if status.authenticated else 'no'}\n"
        f"Server:        {status.server}\n"
        f"Email:         {status.email}\n"
    )
