from aiwiki.navigation.history import History, InMemoryHistory, parse_query, url_for
from aiwiki.navigation.machine import (
    CloseModal,
    Event,
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
    Transition,
    transition,
)

__all__ = [
    "CloseModal",
    "Event",
    "FocusTarget",
    "History",
    "HistoryEffect",
    "HistoryOp",
    "InMemoryHistory",
    "InitialLoad",
    "KeyPress",
    "NavState",
    "OpenQuestion",
    "PickSuggestion",
    "PopState",
    "Submit",
    "Transition",
    "parse_query",
    "transition",
    "url_for",
]
