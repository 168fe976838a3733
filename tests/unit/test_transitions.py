"""Tests for tiered transition matching."""

from __future__ import annotations

import pytest

from jiractl.core.models import MatchTier, Transition
from jiractl.core.transitions import (
    EmptyQueryError,
    NoMatchError,
    ambiguity_warning,
    match_transition,
    pick_best_transition,
)


def _t(id_: str, name: str) -> Transition:
    return Transition(id=id_, name=name)


class TestExactTier:
    def test_exact_match_wins_over_prefix_candidates(self) -> None:
        transitions = [_t("1", "Done (QA)"), _t("2", "Done")]

        outcome = match_transition(transitions, "Done")

        assert outcome.selected == transitions[1]
        assert outcome.matched_by is MatchTier.EXACT
        assert outcome.ambiguity_warning is None

    def test_exact_match_is_case_insensitive_and_trims_query(self) -> None:
        transitions = [_t("1", "In Progress"), _t("2", "In Progress Review")]

        outcome = match_transition(transitions, "  in progress ")

        assert outcome.selected.id == "1"
        assert outcome.matched_by is MatchTier.EXACT

    def test_duplicate_exact_names_break_ties_by_id(self) -> None:
        transitions = [_t("9", "Done"), _t("3", "done")]

        outcome = match_transition(transitions, "DONE")

        # Same length; "done" == "done" lowercased; id "3" < "9".
        assert outcome.selected.id == "3"
        assert outcome.ambiguity_warning is not None


class TestPrefixTier:
    def test_unique_prefix_has_no_warning(self, workflow_transitions: list[Transition]) -> None:
        outcome = match_transition(workflow_transitions, "In Pro")

        assert outcome.selected.name == "In Progress"
        assert outcome.matched_by is MatchTier.PREFIX
        assert outcome.ambiguity_warning is None

    def test_ambiguous_prefix_picks_shortest_and_warns(self) -> None:
        transitions = [_t("10", "Done"), _t("11", "Done (QA)")]

        outcome = match_transition(transitions, "Do")

        assert outcome.selected.name == "Done"
        assert outcome.matched_by is MatchTier.PREFIX
        assert outcome.ambiguity_warning == (
            'status "Do" matched multiple transitions (Done, Done (QA)); using "Done"'
        )

    def test_shortest_wins_regardless_of_input_order(self) -> None:
        transitions = [_t("11", "Done (QA)"), _t("10", "Done")]

        outcome = match_transition(transitions, "do")

        assert outcome.selected.id == "10"
        # Warning lists candidates in collection order.
        assert "(Done (QA), Done)" in (outcome.ambiguity_warning or "")

    def test_equal_length_names_break_ties_alphabetically(self) -> None:
        transitions = [_t("1", "Reopen"), _t("2", "Review")]

        outcome = match_transition(transitions, "re")

        assert outcome.selected.name == "Reopen"


class TestContainsTier:
    def test_earliest_occurrence_is_preferred_in_warning_order(self) -> None:
        transitions = [_t("1", "Send to review"), _t("2", "In review")]

        outcome = match_transition(transitions, "review")

        assert outcome.matched_by is MatchTier.CONTAINS
        # Final tie-break favours the shorter name.
        assert outcome.selected.name == "In review"
        assert outcome.ambiguity_warning == (
            'status "review" matched multiple transitions (In review, Send to review); '
            'using "In review"'
        )

    def test_single_contains_match(self, workflow_transitions: list[Transition]) -> None:
        outcome = match_transition(workflow_transitions, "QA")

        assert outcome.selected.name == "Done (QA)"
        assert outcome.matched_by is MatchTier.CONTAINS
        assert outcome.ambiguity_warning is None

    def test_prefix_tier_beats_contains_tier(self) -> None:
        transitions = [_t("1", "Ready for Dev"), _t("2", "Dev Complete")]

        outcome = match_transition(transitions, "dev")

        assert outcome.selected.name == "Dev Complete"
        assert outcome.matched_by is MatchTier.PREFIX


class TestFailures:
    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    def test_blank_query_raises(self, query: str, workflow_transitions: list[Transition]) -> None:
        with pytest.raises(EmptyQueryError):
            match_transition(workflow_transitions, query)

    def test_no_match_lists_query_and_all_names_in_order(self) -> None:
        transitions = [_t("1", "In Progress"), _t("2", "Done")]

        with pytest.raises(NoMatchError) as excinfo:
            match_transition(transitions, "Blocked")

        message = str(excinfo.value)
        assert "Blocked" in message
        assert message.endswith("available transitions: In Progress, Done")
        assert excinfo.value.query == "Blocked"
        assert excinfo.value.available == ("In Progress", "Done")

    def test_no_match_on_empty_transition_list(self) -> None:
        with pytest.raises(NoMatchError):
            match_transition([], "Done")


class TestDeterminism:
    def test_repeated_calls_are_identical(self, workflow_transitions: list[Transition]) -> None:
        first = match_transition(workflow_transitions, "do")
        second = match_transition(workflow_transitions, "do")
        assert first == second

    def test_input_list_is_not_mutated(self, workflow_transitions: list[Transition]) -> None:
        snapshot = list(workflow_transitions)
        match_transition(workflow_transitions, "o")
        assert workflow_transitions == snapshot

    def test_selected_is_member_of_input(self, workflow_transitions: list[Transition]) -> None:
        outcome = match_transition(workflow_transitions, "o")
        assert any(outcome.selected is t for t in workflow_transitions)


def test_pick_best_transition_requires_candidates() -> None:
    with pytest.raises(ValueError):
        pick_best_transition([])


def test_ambiguity_warning_is_none_for_single_candidate() -> None:
    only = _t("1", "Done")
    assert ambiguity_warning("do", [only], only) is None
