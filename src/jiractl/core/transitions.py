"""Resolve a free-text status name to one available workflow transition.

Three tiers are tried in order, and the first non-empty one wins:

EXACT     case-insensitive equality
PREFIX    the name starts with the query
CONTAINS  the name contains the query; earlier occurrences rank first

Within the winning tier the shortest name wins, then the lowercase name, then
the raw id, so the same inputs always select the same transition.
"""

from __future__ import annotations

from collections.abc import Sequence

from jiractl.core.models import MatchOutcome, MatchTier, Transition


class EmptyQueryError(ValueError):
    """Raised when the status query is blank."""


class NoMatchError(ValueError):
    """Raised when no transition name matches the query in any tier."""

    def __init__(self, query: str, available: Sequence[str]) -> None:
        self.query = query
        self.available = tuple(available)
        super().__init__(
            f'no transition matching "{query}"; '
            f"available transitions: {', '.join(self.available)}"
        )


def match_transition(transitions: Sequence[Transition], query: str) -> MatchOutcome:
    """Pick the transition whose name best matches ``query``."""
    needle = query.strip()
    if not needle:
        raise EmptyQueryError("status query must not be empty")

    needle_lower = needle.lower()
    exact: list[Transition] = []
    prefix: list[Transition] = []
    contains: list[tuple[int, Transition]] = []

    for transition in transitions:
        name_lower = transition.name.lower()
        if name_lower == needle_lower:
            exact.append(transition)
        elif name_lower.startswith(needle_lower):
            prefix.append(transition)
        else:
            position = name_lower.find(needle_lower)
            if position >= 0:
                contains.append((position, transition))

    if exact:
        return _outcome(needle, exact, MatchTier.EXACT)
    if prefix:
        return _outcome(needle, prefix, MatchTier.PREFIX)
    if contains:
        ranked = sorted(
            contains,
            key=lambda item: (item[0], item[1].name.lower(), len(item[1].name)),
        )
        return _outcome(needle, [t for _, t in ranked], MatchTier.CONTAINS)

    raise NoMatchError(needle, [t.name for t in transitions])


def pick_best_transition(candidates: Sequence[Transition]) -> Transition:
    """Apply the final tie-break: shortest name, then lowercase name, then id."""
    if not candidates:
        raise ValueError("candidates must be non-empty")
    if len(candidates) == 1:
        return candidates[0]
    return min(candidates, key=lambda t: (len(t.name), t.name.lower(), t.id))


def ambiguity_warning(
    query: str,
    candidates: Sequence[Transition],
    selected: Transition,
) -> str | None:
    """Describe an ambiguous match, or return None for a unique one."""
    if len(candidates) <= 1:
        return None
    names = ", ".join(t.name for t in candidates)
    return (
        f'status "{query}" matched multiple transitions ({names}); '
        f'using "{selected.name}"'
    )


def _outcome(query: str, candidates: list[Transition], tier: MatchTier) -> MatchOutcome:
    selected = pick_best_transition(candidates)
    return MatchOutcome(
        selected=selected,
        matched_by=tier,
        ambiguity_warning=ambiguity_warning(query, candidates, selected),
    )
