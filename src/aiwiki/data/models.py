"""Core data models for AI-Wiki."""

import re
from dataclasses import dataclass, field
from enum import StrEnum

_QUESTION_PREFIX = re.compile(r"^what is\s+|\?$", re.IGNORECASE)


class View(StrEnum):
    """Top-level screen shown to the user."""

    HOME = "home"
    RESULTS = "results"


def phrase_question(title: str) -> str:
    """Turn a page title into a question card label."""
    title = title.strip()
    return title if title.endswith("?") else f"What is {title}?"


def strip_question(question: str) -> str:
    """Recover the topic from a question phrased by :func:`phrase_question`."""
    return _QUESTION_PREFIX.sub("", question.strip()).strip()


@dataclass
class Question:
    """A related sub-topic phrased as a question.

    ``answer`` is left unset during aggregation and filled in once by the
    enrichment resolver when the question is opened, together with
    ``canonical_title``, the page title the answer was found under.
    """

    question: str
    answer: str | None = None
    source_url: str | None = None
    title_guess: str | None = None
    canonical_title: str | None = None

    @classmethod
    def from_title(
        cls,
        title: str,
        *,
        source_url: str | None = None,
        title_guess: str | None = None,
    ) -> "Question":
        return cls(
            question=phrase_question(title),
            source_url=source_url,
            title_guess=title_guess,
        )

    @property
    def key(self) -> str:
        """Case-insensitive identity used for deduplication."""
        return self.question.strip().lower()

    @property
    def is_answered(self) -> bool:
        return self.answer is not None


@dataclass(frozen=True)
class Summary:
    """Normalized encyclopedia page summary."""

    text: str
    url: str | None = None
    title: str | None = None
    thumb: str | None = None


@dataclass(frozen=True)
class Overview:
    """Short summary of the current topic."""

    text: str
    title: str | None = None
    url: str | None = None
    thumb: str | None = None

    @classmethod
    def from_summary(cls, summary: Summary) -> "Overview":
        return cls(text=summary.text, title=summary.title, url=summary.url, thumb=summary.thumb)


@dataclass(frozen=True)
class ImageItem:
    """An image file attached to a page."""

    url: str
    thumb: str | None = None
    title: str | None = None


@dataclass(frozen=True)
class VideoItem:
    """A video file attached to a page."""

    url: str
    poster: str | None = None
    title: str | None = None


@dataclass(frozen=True)
class MediaResult:
    """Classified media for a single page."""

    images: tuple[ImageItem, ...] = ()
    videos: tuple[VideoItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.images and not self.videos


@dataclass(frozen=True)
class HistoryEntry:
    """One entry on the browser history stack.

    Serialized as ``{"view": ..., "q": ...}``, with ``"modal": True`` added
    for the transient entry pushed while a question is open.
    """

    view: View
    query: str = ""
    is_modal: bool = False

    def to_state(self) -> dict[str, object]:
        state: dict[str, object] = {"view": self.view.value, "q": self.query}
        if self.is_modal:
            state["modal"] = True
        return state

    @classmethod
    def from_state(cls, state: dict[str, object] | None) -> "HistoryEntry | None":
        """Rebuild an entry from serialized history state, or None if unusable."""
        if not isinstance(state, dict):
            return None
        raw_view = state.get("view")
        try:
            view = View(raw_view) if isinstance(raw_view, str) else None
        except ValueError:
            view = None
        if view is None:
            return None
        query = state.get("q")
        return cls(
            view=view,
            query=query if isinstance(query, str) else "",
            is_modal=state.get("modal") is True,
        )


@dataclass(frozen=True)
class AggregationResult:
    """Outcome of a single topic aggregation run."""

    topic: str
    overview: Overview | None = None
    questions: list[Question] = field(default_factory=list)
    not_found: bool = False
    suggestions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Enrichment:
    """Answer text and media resolved for an opened question."""

    question: Question
    summary: Summary | None = None
    media: MediaResult = field(default_factory=MediaResult)


@dataclass
class SessionState:
    """Everything the UI renders for one browser tab.

    Only :class:`aiwiki.session.SessionController` writes to this.
    """

    view: View = View.HOME
    query: str = ""
    draft: str = ""
    overview: Overview | None = None
    questions: list[Question] = field(default_factory=list)
    selected_question: Question | None = None
    media: MediaResult = field(default_factory=MediaResult)
    not_found: bool = False
    suggestions: list[str] = field(default_factory=list)
    error: str | None = None
    is_loading: bool = False
    is_modal_loading: bool = False
    overview_simplified: str | None = None
    answer_simplified: str | None = None

    @property
    def modal_open(self) -> bool:
        return self.selected_question is not None
