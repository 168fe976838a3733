"""Output rendering modules."""

from jiractl.render.json_report import render_json
from jiractl.render.text_report import (
    render_assign_result,
    render_auth_status,
    render_comment_result,
    render_issue_detail,
    render_issue_list,
    render_transition_result,
)

__all__ = [
    "render_assign_result",
    "render_auth_status",
    "render_comment_result",
    "render_issue_detail",
    "render_issue_list",
    "render_json",
    "render_transition_result",
]
