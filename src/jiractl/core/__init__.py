"""Core normalization and matching logic."""

from jiractl.core.document import (
    DocumentNode,
    NodeKind,
    build_plain_document,
    extract_text,
    parse_document,
)
from jiractl.core.models import (
    AssignResult,
    AuthStatus,
    CommentResult,
    CommentView,
    IssueDetailView,
    IssueListView,
    IssueView,
    JiraConfig,
    MatchOutcome,
    MatchTier,
    Page,
    PageResult,
    PartialJiraConfig,
    Transition,
    TransitionResult,
)
from jiractl.core.pagination import MAX_PAGE_SIZE, accumulate_pages
from jiractl.core.transitions import EmptyQueryError, NoMatchError, match_transition
from jiractl.core.views import (
    comment_to_view,
    format_date,
    issue_list_view,
    issue_reporter,
    issue_to_detail_view,
    issue_to_view,
    issues_to_views,
)

__all__ = [
    "AssignResult",
    "AuthStatus",
    "CommentResult",
    "CommentView",
    "DocumentNode",
    "EmptyQueryError",
    "IssueDetailView",
    "IssueListView",
    "IssueView",
    "JiraConfig",
    "MAX_PAGE_SIZE",
    "MatchOutcome",
    "MatchTier",
    "NoMatchError",
    "NodeKind",
    "Page",
    "PageResult",
    "PartialJiraConfig",
    "Transition",
    "TransitionResult",
    "accumulate_pages",
    "build_plain_document",
    "comment_to_view",
    "extract_text",
    "format_date",
    "issue_list_view",
    "issue_reporter",
    "issue_to_detail_view",
    "issue_to_view",
    "issues_to_views",
    "match_transition",
    "parse_document",
]
