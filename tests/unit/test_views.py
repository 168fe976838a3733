"""Tests for view projection and date formatting."""

from __future__ import annotations

import pytest

from jiractl.core.models import PageResult
from jiractl.core.views import (
    comment_to_view,
    format_date,
    issue_list_view,
    issue_reporter,
    issue_to_detail_view,
    issue_to_view,
    user_display_name,
    user_email,
)
from tests.helpers import SERVER, make_issue


class TestFormatDate:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2024-03-05T09:15:30.123+0000", "2024-03-05"),
            ("2024-03-05T23:59:59.1-0700", "2024-03-05"),
            ("2024-03-05T09:15:30.123456+0530", "2024-03-05"),
            ("2024-03-05T09:15:30+0000", "2024-03-05"),
        ],
    )
    def test_parses_supported_timestamps(self, raw: str, expected: str) -> None:
        assert format_date(raw) == expected

    def test_keeps_calendar_date_in_original_offset(self) -> None:
        # 23:30 at -0700 is already the next day in UTC.
        assert format_date("2024-12-31T23:30:00.000-0700") == "2024-12-31"

    def test_empty_string_stays_empty(self) -> None:
        assert format_date("") == ""

    def test_short_malformed_value_returned_unchanged(self) -> None:
        assert format_date("yesterday") == "yesterday"

    def test_long_malformed_value_truncated_to_ten_chars(self) -> None:
        assert format_date("2024-03-05 something odd") == "2024-03-05"

    def test_none_and_non_strings_are_empty(self) -> None:
        assert format_date(None) == ""
        assert format_date(20240305) == ""  # type: ignore[arg-type]


class TestUserIdentity:
    def test_email_preferred_for_assignee(self) -> None:
        user = {"emailAddress": "ada@example.com", "displayName": "Ada"}
        assert user_email(user) == "ada@example.com"
        assert user_display_name(user) == "Ada"

    def test_fallbacks(self) -> None:
        assert user_email({"displayName": "Ada"}) == "Ada"
        assert user_display_name({"emailAddress": "ada@example.com"}) == "ada@example.com"

    def test_missing_user_is_empty(self) -> None:
        assert user_email(None) == ""
        assert user_display_name(None) == ""


def test_issue_to_view_projects_compact_fields() -> None:
    issue = make_issue(
        "PROJ-7",
        summary="Fix login",
        status="In Progress",
        assignee={"emailAddress": "ada@example.com", "displayName": "Ada"},
    )

    view = issue_to_view(issue, SERVER)

    assert view.key == "PROJ-7"
    assert view.summary == "Fix login"
    assert view.status == "In Progress"
    assert view.type == "Task"
    assert view.priority == "Medium"
    assert view.assignee == "ada@example.com"
    assert view.created == "2024-03-05"
    assert view.updated == "2024-03-06"
    assert view.url == f"{SERVER}/browse/PROJ-7"


def test_issue_to_view_tolerates_missing_fields() -> None:
    view = issue_to_view({"key": "PROJ-8"}, SERVER)

    assert view.status == ""
    assert view.assignee == ""
    assert view.created == ""
    assert view.url == f"{SERVER}/browse/PROJ-8"


def test_comment_to_view_extracts_body_text() -> None:
    comment = {
        "author": {"displayName": "Grace", "emailAddress": "grace@example.com"},
        "body": {
            "type": "doc",
            "version": 1,
            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Ship it"}]}],
        },
        "created": "2024-04-01T12:00:00.000+0000",
    }

    view = comment_to_view(comment)

    assert view.author == "Grace"
    assert view.body == "Ship it"
    assert view.created == "2024-04-01"


def test_issue_to_detail_view_includes_description_and_comments() -> None:
    issue = make_issue("PROJ-9", description="Plain description")
    comments = [{"author": {"emailAddress": "bot@example.com"}, "body": "auto", "created": "bad"}]

    view = issue_to_detail_view(issue, SERVER, comments)

    assert view.key == "PROJ-9"
    assert view.description == "Plain description"
    assert len(view.comments) == 1
    assert view.comments[0].author == "bot@example.com"
    assert view.comments[0].created == "bad"


def test_issue_list_view_carries_pagination_accounting() -> None:
    result = PageResult(items=(make_issue("A-1"), make_issue("A-2")), total=9, has_more=True)

    view = issue_list_view(result, SERVER)

    assert view.server == SERVER
    assert view.count == 2
    assert view.total == 9
    assert view.has_more is True
    assert [issue.key for issue in view.issues] == ["A-1", "A-2"]


class TestIssueReporter:
    def test_returns_reporter_with_account_id(self) -> None:
        reporter = {"accountId": "acc-1", "displayName": "Rita"}
        assert issue_reporter(make_issue("A-1", reporter=reporter)) == reporter

    @pytest.mark.parametrize(
        "issue",
        [
            make_issue("A-1", reporter=None),
            make_issue("A-1", reporter={"displayName": "No Account"}),
            {"key": "A-1", "fields": {"reporter": "rita"}},
            {"key": "A-1", "fields": ["not", "a", "mapping"]},
            {"key": "A-1"},
        ],
    )
    def test_missing_or_malformed_reporter_is_none(self, issue: dict) -> None:
        assert issue_reporter(issue) is None
