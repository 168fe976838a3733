"""Payload builders and fakes shared across tests."""

from __future__ import annotations

from typing import Any

from jiractl.core.models import Page, PageResult, Transition
from jiractl.core.pagination import accumulate_pages

SERVER = "https://acme.atlassian.net"


def make_issue(
    key: str,
    *,
    summary: str = "Summary",
    status: str = "To Do",
    assignee: dict[str, Any] | None = None,
    reporter: dict[str, Any] | None = None,
    description: object = None,
    created: str = "2024-03-05T09:15:30.123+0000",
    updated: str = "2024-03-06T10:00:00.000+0000",
) -> dict[str, Any]:
    """Build an issue payload shaped like the search endpoint's response."""
    return {
        "key": key,
        "fields": {
            "summary": summary,
            "status": {"name": status},
            "issuetype": {"name": "Task"},
            "priority": {"name": "Medium"},
            "assignee": assignee,
            "reporter": reporter,
            "description": description,
            "created": created,
            "updated": updated,
        },
    }


class FakeIssueSource:
    """In-memory stand-in for JiraRestAdapter that records mutations."""

    def __init__(
        self,
        *,
        pages: list[Page] | None = None,
        issue: dict[str, Any] | None = None,
        comments: list[dict[str, Any]] | None = None,
        transitions: list[Transition] | None = None,
        users: list[dict[str, Any]] | None = None,
        myself: dict[str, Any] | None = None,
    ) -> None:
        self.pages = list(pages or [])
        self.issue = issue or make_issue("PROJ-1")
        self.comments = comments or []
        self.transitions = transitions or []
        self.users = users or []
        self.myself = myself or {"displayName": "Ada Lovelace"}
        self.page_calls: list[tuple[str, int, str | None]] = []
        self.comment_limits: list[int] = []
        self.applied: list[tuple[str, str]] = []
        self.assigned: list[tuple[str, str]] = []
        self.posted_comments: list[tuple[str, str]] = []

    def get_myself(self) -> dict[str, Any]:
        return self.myself

    def fetch_page(self, jql: str, max_count: int, cursor: str | None) -> Page:
        self.page_calls.append((jql, max_count, cursor))
        return self.pages.pop(0)

    def search_issues(self, jql: str, limit: int) -> PageResult:
        return accumulate_pages(self.fetch_page, jql, limit)

    def get_issue(self, key: str) -> dict[str, Any]:
        return self.issue

    def get_comments(self, key: str, limit: int) -> list[dict[str, Any]]:
        self.comment_limits.append(limit)
        return self.comments[:limit]

    def get_transitions(self, key: str) -> list[Transition]:
        return self.transitions

    def apply_transition(self, key: str, transition_id: str) -> None:
        self.applied.append((key, transition_id))

    def search_users(self, query: str) -> list[dict[str, Any]]:
        return self.users

    def assign_issue(self, key: str, account_id: str) -> None:
        self.assigned.append((key, account_id))

    def add_comment(self, key: str, text: str) -> None:
        self.posted_comments.append((key, text))
