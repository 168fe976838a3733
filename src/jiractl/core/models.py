"""Pydantic config model and result dataclasses."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Annotated, Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, StringConstraints, field_validator

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


# ---------------------------------------------------------------------------
# Pydantic config models (input validation)
# ---------------------------------------------------------------------------


class JiraConfig(BaseModel):
    """Stored credentials for one Jira Cloud site."""

    model_config = ConfigDict(extra="forbid")

    server: NonEmptyStr
    email: NonEmptyStr
    api_token: NonEmptyStr

    @field_validator("server")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class PartialJiraConfig(BaseModel):
    """On-disk config before environment overrides; every field optional."""

    model_config = ConfigDict(extra="forbid")

    server: Optional[str] = None
    email: Optional[str] = None
    api_token: Optional[str] = None


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class MatchTier(enum.Enum):
    """Which matching strategy produced a transition match."""

    EXACT = "exact"
    PREFIX = "prefix"
    CONTAINS = "contains"


# ---------------------------------------------------------------------------
# Result dataclasses (frozen, output-only)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Transition:
    """One workflow transition available on an issue."""

    id: str
    name: str
    target_status_name: str | None = None

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "Transition":
        """Build a transition from the API's ``{id, name, to: {name}}`` shape."""
        target = raw.get("to")
        target_name = target.get("name") if isinstance(target, Mapping) else None
        return cls(
            id=str(raw.get("id", "")),
            name=str(raw.get("name") or ""),
            target_status_name=target_name or None,
        )


@dataclass(frozen=True)
class MatchOutcome:
    """Result of resolving a free-text status against available transitions."""

    selected: Transition
    matched_by: MatchTier
    ambiguity_warning: str | None = None


@dataclass(frozen=True)
class Page:
    """One page returned by a token-cursor paginated source."""

    items: tuple[dict[str, Any], ...]
    total: int
    next_cursor: str | None = None


@dataclass(frozen=True)
class PageResult:
    """Accumulated items across pages plus availability accounting."""

    items: tuple[dict[str, Any], ...]
    total: int
    has_more: bool


# ---------------------------------------------------------------------------
# Compact views (agent-friendly output)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IssueView:
    """Compact projection of one issue."""

    key: str
    summary: str
    status: str
    type: str
    priority: str
    assignee: str
    created: str
    updated: str
    url: str


@dataclass(frozen=True)
class CommentView:
    """Compact projection of one comment."""

    author: str
    body: str
    created: str


@dataclass(frozen=True)
class IssueDetailView(IssueView):
    """Issue view with description text and recent comments."""

    description: str = ""
    comments: tuple[CommentView, ...] = ()


@dataclass(frozen=True)
class IssueListView:
    """A page of issue views with the server's pagination accounting."""

    server: str
    count: int
    total: int
    has_more: bool
    issues: tuple[IssueView, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a status transition."""

    key: str
    status: str
    matched_by: str = ""
    warning: str = ""
    url: str = ""


@dataclass(frozen=True)
class AssignResult:
    """Outcome of a reassignment."""

    key: str
    assignee: str
    assignee_name: str
    url: str


@dataclass(frozen=True)
class CommentResult:
    """Outcome of adding a comment."""

    key: str
    comment: str
    url: str


@dataclass(frozen=True)
class AuthStatus:
    """Current authentication state."""

    authenticated: bool
    server: str
    email: str
