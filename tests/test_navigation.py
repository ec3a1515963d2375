"""Tests for the navigation transition table."""

import pytest

from aiwiki.data import HistoryEntry, View
from aiwiki.navigation.machine import (
    CloseModal,
    FocusTarget,
    HistoryEffect,
    HistoryOp,
    InitialLoad,
    KeyPress,
    NavState,
    OpenQuestion,
    PickSuggestion,
    PopState,
    Submit,
    transition,
)

HOME = NavState()
RESULTS = NavState(view=View.RESULTS, query="black hole")
MODAL = NavState(view=View.RESULTS, query="black hole", modal_open=True)
MODAL_ENTRY = HistoryEntry(View.RESULTS, "black hole", is_modal=True)
RESULTS_ENTRY = HistoryEntry(View.RESULTS, "black hole")


class TestSubmit:
    def test_home_submit_pushes_results(self) -> None:
        t = transition(HOME, Submit("  black hole "))

        assert t.state == RESULTS
        assert t.history == HistoryEffect(HistoryOp.PUSH, RESULTS_ENTRY)
        assert t.aggregate is True

    def test_blank_submit_is_ignored(self) -> None:
        t = transition(HOME, Submit("   "))

        assert t.state == HOME
        assert t.history is None
        assert t.aggregate is False

    def test_suggestion_click_behaves_like_submit(self) -> None:
        t = transition(RESULTS, PickSuggestion("Black Hole"))

        assert t.state == NavState(view=View.RESULTS, query="Black Hole")
        assert t.history == HistoryEffect(HistoryOp.PUSH, HistoryEntry(View.RESULTS, "Black Hole"))
        assert t.aggregate is True

    def test_submit_with_modal_open_closes_it(self) -> None:
        t = transition(MODAL, Submit("quasar"), top=MODAL_ENTRY)

        assert t.state.modal_open is False
        assert t.clear_selection is True


class TestModal:
    def test_open_pushes_one_modal_entry(self) -> None:
        t = transition(RESULTS, OpenQuestion(), top=RESULTS_ENTRY)

        assert t.state == MODAL
        assert t.history == HistoryEffect(HistoryOp.PUSH, MODAL_ENTRY)
        assert t.enrich is True

    def test_open_on_home_is_ignored(self) -> None:
        t = transition(HOME, OpenQuestion())

        assert t.state == HOME
        assert t.history is None
        assert t.enrich is False

    def test_open_while_open_does_not_push_again(self) -> None:
        t = transition(MODAL, OpenQuestion(), top=MODAL_ENTRY)

        assert t.state == MODAL
        assert t.history is None
        assert t.enrich is True

    def test_close_with_modal_entry_on_top_goes_back(self) -> None:
        t = transition(MODAL, CloseModal(), top=MODAL_ENTRY)

        assert t.history == HistoryEffect(HistoryOp.BACK)
        assert t.state == MODAL
        assert t.clear_selection is False

    def test_close_without_modal_entry_closes_directly(self) -> None:
        t = transition(MODAL, CloseModal(), top=RESULTS_ENTRY)

        assert t.history is None
        assert t.state == RESULTS
        assert t.clear_selection is True

    def test_close_when_closed_is_noop(self) -> None:
        t = transition(RESULTS, CloseModal(), top=RESULTS_ENTRY)

        assert t.state == RESULTS
        assert t.history is None
        assert t.clear_selection is False


class TestPopState:
    def test_popping_modal_entry_only_closes_modal(self) -> None:
        t = transition(MODAL, PopState(MODAL_ENTRY))

        assert t.state == RESULTS
        assert t.clear_selection is True
        assert t.aggregate is False
        assert t.history is None

    def test_back_from_modal_to_same_results_keeps_results(self) -> None:
        t = transition(MODAL, PopState(RESULTS_ENTRY))

        assert t.state == RESULTS
        assert t.clear_selection is True
        assert t.aggregate is False

    def test_pop_from_modal_to_other_query_reaggregates(self) -> None:
        t = transition(MODAL, PopState(HistoryEntry(View.RESULTS, "quasar")))

        assert t.state == NavState(view=View.RESULTS, query="quasar")
        assert t.clear_selection is True
        assert t.aggregate is True

    def test_restored_results_entry_reaggregates(self) -> None:
        t = transition(RESULTS, PopState(HistoryEntry(View.RESULTS, "quasar")))

        assert t.state == NavState(view=View.RESULTS, query="quasar")
        assert t.aggregate is True

    def test_restored_home_entry_clears_selection(self) -> None:
        t = transition(RESULTS, PopState(HistoryEntry(View.HOME, "")))

        assert t.state == HOME
        assert t.aggregate is False
        assert t.clear_selection is True

    def test_missing_state_falls_back_to_url(self) -> None:
        t = transition(HOME, PopState(None, url_query="quasar"))

        assert t.state == NavState(view=View.RESULTS, query="quasar")
        assert t.aggregate is True

    def test_missing_state_and_url_goes_home(self) -> None:
        t = transition(RESULTS, PopState(None))

        assert t.state == HOME
        assert t.aggregate is False

    def test_pop_never_touches_history(self) -> None:
        for entry in (None, MODAL_ENTRY, RESULTS_ENTRY, HistoryEntry(View.HOME)):
            assert transition(MODAL, PopState(entry)).history is None


class TestInitialLoad:
    def test_query_in_url_replaces_with_results(self) -> None:
        t = transition(HOME, InitialLoad(" quasar "))

        assert t.state == NavState(view=View.RESULTS, query="quasar")
        assert t.history == HistoryEffect(HistoryOp.REPLACE, HistoryEntry(View.RESULTS, "quasar"))
        assert t.aggregate is True

    def test_no_query_replaces_with_home(self) -> None:
        t = transition(HOME, InitialLoad(""))

        assert t.state == HOME
        assert t.history == HistoryEffect(HistoryOp.REPLACE, HistoryEntry(View.HOME, ""))
        assert t.aggregate is False


class TestKeyPress:
    @pytest.mark.parametrize(
        ("state", "target"),
        [(HOME, FocusTarget.HOME), (RESULTS, FocusTarget.HEADER)],
    )
    def test_slash_focuses_active_input(self, state: NavState, target: FocusTarget) -> None:
        assert transition(state, KeyPress("/")).focus is target

    def test_slash_while_typing_is_ignored(self) -> None:
        assert transition(RESULTS, KeyPress("/", typing=True)).focus is None

    def test_escape_closes_modal_via_history(self) -> None:
        t = transition(MODAL, KeyPress("Escape"), top=MODAL_ENTRY)

        assert t.history == HistoryEffect(HistoryOp.BACK)
        assert t.clear_draft is False

    def test_escape_without_modal_clears_draft(self) -> None:
        t = transition(RESULTS, KeyPress("Escape"))

        assert t.clear_draft is True
        assert t.state == RESULTS

    def test_other_keys_do_nothing(self) -> None:
        t = transition(RESULTS, KeyPress("a"))

        assert t.state == RESULTS
        assert t.focus is None
        assert t.clear_draft is False


def test_unknown_event_raises() -> None:
    with pytest.raises(TypeError, match="Unknown navigation event"):
        transition(HOME, object())  # type: ignore[arg-type]
