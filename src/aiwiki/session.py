"""Session controller: the single writer of :class:`SessionState`."""

import logging

from aiwiki.data import HistoryEntry, MediaResult, Question, SessionState, strip_question
from aiwiki.navigation.history import History, parse_query
from aiwiki.navigation.machine import (
    CloseModal,
    Event,
    FocusTarget,
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
from aiwiki.pipeline.aggregator import AggregationError, TopicAggregator
from aiwiki.pipeline.enrichment import EnrichmentResolver
from aiwiki.simplify.base import NOT_ENOUGH_INFO
from aiwiki.simplify.chain import SimplifierChain

logger = logging.getLogger(__name__)


class SessionController:
    """Drive one search session from UI and history events.

    Each public handler feeds an event through the navigation transition
    table, applies the resulting history operation, and then starts the
    aggregation or enrichment it asks for.

    Aggregation runs are tagged with a monotonically increasing run token.
    Only the most recently started run may commit its results; older runs
    that finish later are dropped. In-flight requests are never cancelled.

    Args:
        aggregator: Topic aggregator.
        resolver: Enrichment resolver for opened questions.
        simplifier: Simplifier chain for "explain like I'm 5".
        history: Browser history stack.
    """

    def __init__(
        self,
        aggregator: TopicAggregator,
        resolver: EnrichmentResolver,
        simplifier: SimplifierChain,
        history: History,
    ) -> None:
        self._aggregator = aggregator
        self._resolver = resolver
        self._simplifier = simplifier
        self._history = history
        self._state = SessionState()
        self._run_token = 0
        self._selection_token = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def history(self) -> History:
        return self._history

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    async def load(self, url: str = "") -> None:
        """Initialize from the page URL, replacing the baseline history entry."""
        await self._dispatch(InitialLoad(url_query=parse_query(url)))

    async def submit(self, query: str | None = None) -> None:
        """Search for ``query`` (defaults to the search box text)."""
        text = self._state.draft if query is None else query
        await self._dispatch(Submit(query=text))

    async def pick_suggestion(self, title: str) -> None:
        """Search for a clicked "did you mean" suggestion."""
        await self._dispatch(PickSuggestion(title=title))

    async def open_question(self, question: Question) -> None:
        """Open a question card and resolve its answer and media."""
        await self._dispatch(OpenQuestion(), question=question)

    async def close_modal(self) -> None:
        """Close the question modal via history when a modal entry is on top."""
        await self._dispatch(CloseModal())

    async def on_popstate(self, entry: HistoryEntry | None, url: str = "") -> None:
        """Reconcile state after back/forward navigation landed on ``entry``."""
        await self._dispatch(PopState(entry=entry, url_query=parse_query(url)))

    async def on_key(self, key: str, *, typing: bool = False) -> FocusTarget | None:
        """Handle a global shortcut; returns the input that should take focus."""
        result = await self._dispatch(KeyPress(key=key, typing=typing))
        return result.focus

    def set_draft(self, text: str) -> None:
        self._state.draft = text

    async def simplify_overview(self) -> str:
        """Simplify the current overview and store the result."""
        overview = self._state.overview
        if overview is None:
            self._state.overview_simplified = NOT_ENOUGH_INFO
            return NOT_ENOUGH_INFO

        hint = overview.title or self._state.query
        simplified = await self._simplifier.simplify(overview.text, title_hint=hint)
        if self._state.overview is overview:
            self._state.overview_simplified = simplified
        return simplified

    async def simplify_answer(self) -> str:
        """Simplify the open question's answer and store the result."""
        question = self._state.selected_question
        if question is None:
            return NOT_ENOUGH_INFO

        hint = question.title_guess or strip_question(question.question)
        simplified = await self._simplifier.simplify(
            question.answer or "",
            title_hint=hint,
            alternates=[question.question],
        )
        if self._state.selected_question is question:
            self._state.answer_simplified = simplified
        return simplified

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _nav_state(self) -> NavState:
        return NavState(
            view=self._state.view,
            query=self._state.query,
            modal_open=self._state.modal_open,
        )

    async def _dispatch(self, event: Event, *, question: Question | None = None) -> Transition:
        result = transition(self._nav_state(), event, top=self._history.current)
        logger.debug("%s -> %s", type(event).__name__, result)

        self._state.view = result.state.view
        if self._state.query != result.state.query:
            self._state.query = result.state.query
            self._state.draft = result.state.query

        if result.clear_selection:
            self._clear_selection()
        if result.clear_draft:
            self._state.draft = ""

        effect = result.history
        if effect is not None:
            if effect.op is HistoryOp.PUSH and effect.entry is not None:
                self._history.push(effect.entry)
            elif effect.op is HistoryOp.REPLACE and effect.entry is not None:
                self._history.replace(effect.entry)
            elif effect.op is HistoryOp.BACK:
                self._history.back()

        if result.enrich and question is not None:
            await self._enrich(question)
        if result.aggregate:
            await self._aggregate(result.state.query)
        return result

    def _clear_selection(self) -> None:
        self._selection_token += 1
        self._state.selected_question = None
        self._state.media = MediaResult()
        self._state.answer_simplified = None
        self._state.is_modal_loading = False

    async def _aggregate(self, topic: str) -> bool:
        """Run an aggregation; returns False if a newer run superseded it."""
        self._run_token += 1
        token = self._run_token

        state = self._state
        state.overview = None
        state.questions = []
        state.not_found = False
        state.suggestions = []
        state.error = None
        state.overview_simplified = None
        state.is_loading = True

        try:
            result = await self._aggregator.aggregate(topic)
        except AggregationError as e:
            if token != self._run_token:
                return False
            state.error = str(e)
            state.is_loading = False
            return True

        if token != self._run_token:
            logger.info("Discarding stale results for %r", topic)
            return False

        state.overview = result.overview
        state.questions = result.questions
        state.not_found = result.not_found
        state.suggestions = result.suggestions
        state.is_loading = False
        return True

    async def _enrich(self, question: Question) -> None:
        self._selection_token += 1
        token = self._selection_token

        state = self._state
        state.selected_question = question
        state.media = MediaResult()
        state.answer_simplified = None
        state.is_modal_loading = True

        enrichment = await self._resolver.resolve(question)
        if token != self._selection_token:
            return
        state.media = enrichment.media
        state.is_modal_loading = False
