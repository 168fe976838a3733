"""Cursor-based page accumulation."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from jiractl.core.models import Page, PageResult

logger = logging.getLogger("jiractl")

# Upper bound on items requested from the server in a single call.
MAX_PAGE_SIZE = 100

FetchPage = Callable[[str, int, Optional[str]], Page]


def accumulate_pages(
    fetch_page: FetchPage,
    query: str,
    limit: int,
    *,
    page_cap: int = MAX_PAGE_SIZE,
) -> PageResult:
    """Fetch pages until ``limit`` items are collected or the source runs dry.

    ``fetch_page(query, max_count, cursor)`` is called sequentially, each call
    passing the cursor returned by the previous one. Errors raised by
    ``fetch_page`` propagate unchanged and nothing accumulated so far is
    returned.

    ``has_more`` is true when the server still holds a continuation cursor, or
    when fewer items were returned than the server's last reported total.
    The total is only a hint: it may drift between pages.
    """
    if limit <= 0:
        raise ValueError(f"limit must be greater than 0, got {limit}")
    if page_cap <= 0:
        raise ValueError(f"page_cap must be greater than 0, got {page_cap}")

    items: list[dict[str, Any]] = []
    total = 0
    cursor: str | None = None

    while len(items) < limit:
        page_size = min(limit - len(items), page_cap)
        page = fetch_page(query, page_size, cursor)
        total = page.total
        items.extend(page.items)
        cursor = page.next_cursor or None
        logger.debug(
            "Fetched page: %d items (accumulated %d, total %d, cursor=%s)",
            len(page.items),
            len(items),
            total,
            "yes" if cursor else "no",
        )
        if not page.items or cursor is None:
            break

    if len(items) > limit:
        del items[limit:]

    has_more = cursor is not None or len(items) < total
    return PageResult(items=tuple(items), total=total, has_more=has_more)
