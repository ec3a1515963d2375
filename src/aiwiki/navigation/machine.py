"""Navigation transition table.

Maps ``(NavState, event)`` to the next state, the history side effect, and
the work the session should start. The table is pure: nothing here touches
history or the network, so it can be tested without a browser.

    Home --Submit(q)--> Results(q)              push {results, q}, aggregate
    Results(q) --OpenQuestion--> +modal         push {modal, results, q}, enrich
    +modal --CloseModal--> (top is modal)       back; popstate finishes the job
    +modal --CloseModal--> Results(q)           (no modal entry on top)
    PopState(modal entry)                       close modal, keep view/query
    PopState(entry under modal)                 close modal, keep results
    PopState(entry)                             adopt entry, aggregate on results
    InitialLoad(q)                              replace baseline entry
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

from aiwiki.data import HistoryEntry, View


class HistoryOp(StrEnum):
    PUSH = "push"
    REPLACE = "replace"
    BACK = "back"


class FocusTarget(StrEnum):
    HEADER = "header"
    HOME = "home"


@dataclass(frozen=True)
class NavState:
    """Navigation-relevant slice of the session state."""

    view: View = View.HOME
    query: str = ""
    modal_open: bool = False


@dataclass(frozen=True)
class HistoryEffect:
    op: HistoryOp
    entry: HistoryEntry | None = None


@dataclass(frozen=True)
class Transition:
    """Result of feeding one event to the table."""

    state: NavState
    history: HistoryEffect | None = None
    aggregate: bool = False
    enrich: bool = False
    clear_selection: bool = False
    clear_draft: bool = False
    focus: FocusTarget | None = None


# ============================================================
# Events
# ============================================================


@dataclass(frozen=True)
class Submit:
    query: str


@dataclass(frozen=True)
class PickSuggestion:
    title: str


@dataclass(frozen=True)
class OpenQuestion:
    pass


@dataclass(frozen=True)
class CloseModal:
    pass


@dataclass(frozen=True)
class PopState:
    """Back/forward landed on ``entry``; ``url_query`` is used when it is missing."""

    entry: HistoryEntry | None
    url_query: str = ""


@dataclass(frozen=True)
class InitialLoad:
    url_query: str = ""


@dataclass(frozen=True)
class KeyPress:
    key: str
    typing: bool = False


Event = Submit | PickSuggestion | OpenQuestion | CloseModal | PopState | InitialLoad | KeyPress


# ============================================================
# Handlers
# ============================================================


def _search(state: NavState, query: str) -> Transition:
    q = query.strip()
    if not q:
        return Transition(state=state)
    return Transition(
        state=NavState(view=View.RESULTS, query=q, modal_open=False),
        history=HistoryEffect(HistoryOp.PUSH, HistoryEntry(View.RESULTS, q)),
        aggregate=True,
        clear_selection=state.modal_open,
    )


def _on_submit(state: NavState, event: Submit, top: HistoryEntry | None) -> Transition:
    return _search(state, event.query)


def _on_pick_suggestion(
    state: NavState, event: PickSuggestion, top: HistoryEntry | None
) -> Transition:
    return _search(state, event.title)


def _on_open(state: NavState, event: OpenQuestion, top: HistoryEntry | None) -> Transition:
    if state.view is not View.RESULTS:
        return Transition(state=state)
    if state.modal_open:
        return Transition(state=state, enrich=True)
    return Transition(
        state=replace(state, modal_open=True),
        history=HistoryEffect(
            HistoryOp.PUSH, HistoryEntry(View.RESULTS, state.query, is_modal=True)
        ),
        enrich=True,
    )


def _on_close(state: NavState, event: CloseModal, top: HistoryEntry | None) -> Transition:
    if not state.modal_open:
        return Transition(state=state)
    if top is not None and top.is_modal:
        # The popstate that follows closes the modal.
        return Transition(state=state, history=HistoryEffect(HistoryOp.BACK))
    return Transition(state=replace(state, modal_open=False), clear_selection=True)


def _on_popstate(state: NavState, event: PopState, top: HistoryEntry | None) -> Transition:
    entry = event.entry
    if entry is not None and entry.is_modal:
        return Transition(state=replace(state, modal_open=False), clear_selection=True)

    if entry is not None:
        view, query = entry.view, entry.query
    else:
        query = event.url_query.strip()
        view = View.RESULTS if query else View.HOME

    next_state = NavState(view=view, query=query, modal_open=False)
    if state.modal_open and (view, query) == (state.view, state.query):
        # Landed on the page under the modal; its results are still current.
        return Transition(state=next_state, clear_selection=True)
    if view is View.RESULTS and query:
        return Transition(state=next_state, aggregate=True, clear_selection=state.modal_open)
    return Transition(state=next_state, clear_selection=True)


def _on_initial_load(state: NavState, event: InitialLoad, top: HistoryEntry | None) -> Transition:
    q = event.url_query.strip()
    if q:
        return Transition(
            state=NavState(view=View.RESULTS, query=q),
            history=HistoryEffect(HistoryOp.REPLACE, HistoryEntry(View.RESULTS, q)),
            aggregate=True,
        )
    return Transition(
        state=NavState(view=View.HOME, query=""),
        history=HistoryEffect(HistoryOp.REPLACE, HistoryEntry(View.HOME, "")),
    )


def _on_key(state: NavState, event: KeyPress, top: HistoryEntry | None) -> Transition:
    if event.key == "/" and not event.typing:
        target = FocusTarget.HEADER if state.view is View.RESULTS else FocusTarget.HOME
        return Transition(state=state, focus=target)
    if event.key == "Escape":
        if state.modal_open:
            return _on_close(state, CloseModal(), top)
        return Transition(state=state, clear_draft=True)
    return Transition(state=state)


_TRANSITIONS: dict[type, Callable[[NavState, Any, HistoryEntry | None], Transition]] = {
    Submit: _on_submit,
    PickSuggestion: _on_pick_suggestion,
    OpenQuestion: _on_open,
    CloseModal: _on_close,
    PopState: _on_popstate,
    InitialLoad: _on_initial_load,
    KeyPress: _on_key,
}


def transition(state: NavState, event: Event, *, top: HistoryEntry | None = None) -> Transition:
    """Look up the transition for ``event`` in ``state``.

    Args:
        state: Current navigation state.
        event: The incoming event.
        top: The history entry currently on top of the stack.

    Returns:
        Next state plus history effect and commands.

    Raises:
        TypeError: If ``event`` is not a known event type.
    """
    handler = _TRANSITIONS.get(type(event))
    if handler is None:
        raise TypeError(f"Unknown navigation event: {type(event).__name__}")
    return handler(state, event, top)
