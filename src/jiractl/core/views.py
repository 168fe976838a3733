"""Project raw Jira payloads into compact views."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any

from jiractl.core.document import extract_text
from jiractl.core.models import (
    CommentView,
    IssueDetailView,
    IssueListView,
    IssueView,
    PageResult,
)

# Millisecond precision first, then any precision (including none).
_TIMESTAMP_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)


def format_date(value: str | None) -> str:
    """Reduce an API timestamp to ``YYYY-MM-DD``.

    Unparseable input degrades to its first ten characters, or to itself when
    shorter.
    """
    if not value or not isinstance(value, str):
        return ""
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, fmt).strftime("%Y-%m-%d")
        except ValueError:
            continue
    if len(value) >= 10:
        return value[:10]
    return value


def browse_url(server: str, key: str) -> str:
    return f"{server}/browse/{key}"


def name_or_empty(value: object) -> str:
    if isinstance(value, Mapping):
        return str(value.get("name") or "")
    return ""


def user_email(user: object) -> str:
    """Identify a user by email, falling back to display name."""
    if not isinstance(user, Mapping):
        return ""
    return str(user.get("emailAddress") or user.get("displayName") or "")


def user_display_name(user: object) -> str:
    """Identify a user by display name, falling back to email."""
    if not isinstance(user, Mapping):
        return ""
    return str(user.get("displayName") or user.get("emailAddress") or "")


def _fields(issue: Mapping[str, Any]) -> Mapping[str, Any]:
    fields = issue.get("fields")
    return fields if isinstance(fields, Mapping) else {}


def issue_reporter(issue: Mapping[str, Any]) -> Mapping[str, Any] | None:
    """The issue's reporter, or None when it is missing or has no account id."""
    reporter = _fields(issue).get("reporter")
    if not isinstance(reporter, Mapping) or not reporter.get("accountId"):
        return None
    return reporter


def issue_to_view(issue: Mapping[str, Any], server: str) -> IssueView:
    key = str(issue.get("key") or "")
    fields = _fields(issue)
    return IssueView(
        key=key,
        summary=str(fields.get("summary") or ""),
        status=name_or_empty(fields.get("status")),
        type=name_or_empty(fields.get("issuetype")),
        priority=name_or_empty(fields.get("priority")),
        assignee=user_email(fields.get("assignee")),
        created=format_date(fields.get("created")),
        updated=format_date(fields.get("updated")),
        url=browse_url(server, key),
    )


def issues_to_views(issues: Iterable[Mapping[str, Any]], server: str) -> tuple[IssueView, ...]:
    return tuple(issue_to_view(issue, server) for issue in issues)


def comment_to_view(comment: Mapping[str, Any]) -> CommentView:
    return CommentView(
        author=user_display_name(comment.get("author")),
        body=extract_text(comment.get("body")),
        created=format_date(comment.get("created")),
    )


def issue_to_detail_view(
    issue: Mapping[str, Any],
    server: str,
    comments: Sequence[Mapping[str, Any]] = (),
) -> IssueDetailView:
    """Issue view plus extracted description and comment views."""
    base = issue_to_view(issue, server)
    return IssueDetailView(
        key=base.key,
        summary=base.summary,
        status=base.status,
        type=base.type,
        priority=base.priority,
        assignee=base.assignee,
        created=base.created,
        updated=base.updated,
        url=base.url,
        description=extract_text(_fields(issue).get("description")),
        comments=tuple(comment_to_view(c) for c in comments),
    )


def issue_list_view(result: PageResult, server: str) -> IssueListView:
    views = issues_to_views(result.items, server)
    return IssueListView(
        server=server,
        count=len(views),
        total=result.total,
        has_more=result.has_more,
        issues=views,
    )
