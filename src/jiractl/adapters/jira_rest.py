"""Jira Cloud REST API adapter."""

from __future__ import annotations

import base64
import json
import logging
from http import HTTPStatus
from http.client import HTTPException
from typing import Any, Callable, Mapping, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from jiractl.adapters.jira_adapter import JiraAdapterError, format_api_error
from jiractl.core.document import build_plain_document
from jiractl.core.models import JiraConfig, Page, PageResult, Transition
from jiractl.core.pagination import accumulate_pages
from jiractl.version import __version__

logger = logging.getLogger("jiractl")

API_PREFIX = "/rest/api/3"
SEARCH_FIELDS = "summary,status,issuetype,priority,assignee,reporter,created,updated,labels,components"
DETAIL_FIELDS = (
    "summary,description,status,issuetype,priority,assignee,reporter,created,updated,labels,components"
)

RequestFn = Callable[[str, str, Mapping[str, str], Optional[bytes]], tuple[int, dict[str, str], str]]


class JiraRestAdapter:
    """Talk to the Jira Cloud REST API with basic auth."""

    def __init__(
        self,
        config: JiraConfig,
        *,
        timeout_seconds: float = 30.0,
        request_fn: RequestFn | None = None,
    ) -> None:
        self._server = config.server.rstrip("/")
        credentials = f"{config.email}:{config.api_token}".encode("utf-8")
        self._auth_header = "Basic " + base64.b64encode(credentials).decode("ascii")
        self._timeout_seconds = timeout_seconds
        self._request_fn = request_fn or self._default_request

    @property
    def server(self) -> str:
        return self._server

    # -- reads --------------------------------------------------------------

    def get_myself(self) -> dict[str, Any]:
        """Return the authenticated user's profile."""
        return self._expect_object(self._request_json("GET", "/myself"), "myself")

    def fetch_page(self, jql: str, max_count: int, cursor: str | None) -> Page:
        """Fetch one page of the token-paginated JQL search."""
        params: dict[str, str] = {
            "jql": jql,
            "maxResults": str(max_count),
            "fields": SEARCH_FIELDS,
        }
        if cursor:
            params["nextPageToken"] = cursor
        payload = self._expect_object(
            self._request_json("GET", "/search/jql", params=params),
            "search",
        )
        raw_issues = payload.get("issues") or []
        if not isinstance(raw_issues, list):
            raise JiraAdapterError(f"Unexpected issues payload in search response: {raw_issues!r}")
        total = payload.get("total")
        return Page(
            items=tuple(issue for issue in raw_issues if isinstance(issue, dict)),
            total=total if isinstance(total, int) else 0,
            next_cursor=payload.get("nextPageToken") or None,
        )

    def search_issues(self, jql: str, limit: int) -> PageResult:
        """Fetch up to ``limit`` issues matching a JQL query."""
        return accumulate_pages(self.fetch_page, jql, limit)

    def get_issue(self, key: str) -> dict[str, Any]:
        """Fetch one issue including its description."""
        return self._expect_object(
            self._request_json("GET", f"/issue/{_escape(key)}", params={"fields": DETAIL_FIELDS}),
            f"issue {key}",
        )

    def get_comments(self, key: str, limit: int) -> list[dict[str, Any]]:
        """Fetch the newest ``limit`` comments on an issue."""
        payload = self._expect_object(
            self._request_json(
                "GET",
                f"/issue/{_escape(key)}/comment",
                params={"orderBy": "-created", "maxResults": str(limit)},
            ),
            f"comments for {key}",
        )
        comments = payload.get("comments") or []
        return [comment for comment in comments if isinstance(comment, dict)]

    def get_transitions(self, key: str) -> list[Transition]:
        """List transitions currently available on an issue."""
        payload = self._expect_object(
            self._request_json("GET", f"/issue/{_escape(key)}/transitions"),
            f"transitions for {key}",
        )
        transitions = payload.get("transitions") or []
        return [Transition.from_payload(raw) for raw in transitions if isinstance(raw, dict)]

    def search_users(self, query: str) -> list[dict[str, Any]]:
        """Find users matching an email address or name."""
        payload = self._request_json("GET", "/user/search", params={"query": query})
        if not isinstance(payload, list):
            raise JiraAdapterError(f"Unexpected payload for user search: {payload!r}")
        return [user for user in payload if isinstance(user, dict)]

    # -- writes -------------------------------------------------------------

    def apply_transition(self, key: str, transition_id: str) -> None:
        """Move an issue through the given transition."""
        self._request_json(
            "POST",
            f"/issue/{_escape(key)}/transitions",
            body={"transition": {"id": transition_id}},
            expected_status=HTTPStatus.NO_CONTENT,
        )

    def assign_issue(self, key: str, account_id: str) -> None:
        """Assign an issue to an account id."""
        self._request_json(
            "PUT",
            f"/issue/{_escape(key)}/assignee",
            body={"accountId": account_id},
            expected_status=HTTPStatus.NO_CONTENT,
        )

    def add_comment(self, key: str, text: str) -> None:
        """Post a plain-text comment wrapped in a one-paragraph document."""
        self._request_json(
            "POST",
            f"/issue/{_escape(key)}/comment",
            body={"body": build_plain_document(text)},
            expected_status=HTTPStatus.CREATED,
        )

    # -- plumbing -----------------------------------------------------------

    def _request_json(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        body: object = None,
        expected_status: int | None = None,
    ) -> object:
        url = f"{self._server}{API_PREFIX}{path}"
        if params:
            url = f"{url}?{urlencode(params)}"
        headers = {
            "Accept": "application/json",
            "Authorization": self._auth_header,
            "User-Agent": f"jiractl/{__version__}",
        }
        data: bytes | None = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(body).encode("utf-8")

        logger.debug("%s %s", method, url)
        status, _, text = self._request_fn(method, url, headers, data)
        logger.debug("%s %s -> %d", method, url, status)

        ok = status == expected_status if expected_status is not None else status < 300
        if not ok:
            raise JiraAdapterError(format_api_error(status, _reason(status), text, _try_json(text)))

        if expected_status is not None or not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise JiraAdapterError(f"Failed to decode response from {url}: {exc}") from exc

    def _default_request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        data: bytes | None,
    ) -> tuple[int, dict[str, str], str]:
        request = Request(url=url, data=data, headers=dict(headers), method=method)
        try:
            with urlopen(request, timeout=self._timeout_seconds) as response:
                return response.status, dict(response.headers.items()), response.read().decode("utf-8")
        except HTTPError as exc:
            text = exc.read().decode("utf-8", errors="replace")
            return exc.code, dict(exc.headers.items()) if exc.headers else {}, text
        except UnicodeDecodeError as exc:
            raise JiraAdapterError(f"Failed to decode response from {url}: {exc}") from exc
        except (URLError, OSError, HTTPException) as exc:
            raise JiraAdapterError(f"jira api request failed: {exc}") from exc

    @staticmethod
    def _expect_object(payload: object, what: str) -> dict[str, Any]:
        if not isinstance(payload, dict):
            raise JiraAdapterError(f"Unexpected payload for {what}: {payload!r}")
        return payload


def _escape(segment: str) -> str:
    return quote(segment, safe="")


def _reason(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def _try_json(text: str) -> object:
    try:
        return json.loads(text)
    except ValueError:
        return None
