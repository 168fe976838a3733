"""Shared types and interface for Jira issue-source adapters."""

from __future__ import annotations

from typing import Any, Protocol

from jiractl.core.models import Page, PageResult, Transition


class JiraAdapterError(RuntimeError):
    """Raised when a request to the Jira API fails."""


def format_api_error(status: int, reason: str, body: str, payload: object) -> str:
    """Build a readable message from a Jira error response.

    Jira reports failures as ``{"errorMessages": [...], "errors": {field: msg}}``.
    When neither is present the raw body (or the status line) is used.
    """
    status_line = f"{status} {reason}".strip()
    messages: list[str] = []
    if isinstance(payload, dict):
        error_messages = payload.get("errorMessages")
        if isinstance(error_messages, list):
            messages.extend(str(message) for message in error_messages)
        errors = payload.get("errors")
        if isinstance(errors, dict):
            messages.extend(f"{key}: {value}" for key, value in errors.items())
    if messages:
        return f"jira api error ({status_line}): {'; '.join(messages)}"
    detail = body.strip() or status_line
    return f"jira api error ({status_line}): {detail}"


class JiraIssueSource(Protocol):
    """Swappable issue-source interface consumed by CLI commands."""

    def get_myself(self) -> dict[str, Any]:
        """Return the authenticated user's profile."""

    def fetch_page(self, jql: str, max_count: int, cursor: str | None) -> Page:
        """Fetch one page of issues matching a JQL query."""

    def search_issues(self, jql: str, limit: int) -> PageResult:
        """Fetch up to ``limit`` issues matching a JQL query."""

    def get_issue(self, key: str) -> dict[str, Any]:
        """Fetch one issue including its description."""

    def get_comments(self, key: str, limit: int) -> list[dict[str, Any]]:
        """Fetch the newest comments on an issue."""

    def get_transitions(self, key: str) -> list[Transition]:
        """List transitions currently available on an issue."""

    def apply_transition(self, key: str, transition_id: str) -> None:
        """Move an issue through a transition."""

    def search_users(self, query: str) -> list[dict[str, Any]]:
        """Find users by email or name."""

    def assign_issue(self, key: str, account_id: str) -> None:
        """Assign an issue to an account."""

    def add_comment(self, key: str, text: str) -> None:
        """Post a plain-text comment."""
