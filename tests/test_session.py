"""Tests for SessionController."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from aiwiki.data import (
    AggregationResult,
    Enrichment,
    HistoryEntry,
    ImageItem,
    MediaResult,
    Overview,
    Question,
    Summary,
    View,
)
from aiwiki.navigation.history import InMemoryHistory
from aiwiki.navigation.machine import FocusTarget
from aiwiki.pipeline.aggregator import AggregationError, TopicAggregator
from aiwiki.run_logger import RunLogger
from aiwiki.session import SessionController
from aiwiki.simplify.base import NOT_ENOUGH_INFO

MEDIA = MediaResult(images=(ImageItem(url="https://x/a.jpg"),))


def result_for(topic: str) -> AggregationResult:
    return AggregationResult(
        topic=topic,
        overview=Overview(text=f"About {topic}.", title=topic.title()),
        questions=[Question.from_title(f"{topic} {i}") for i in range(3)],
    )


@pytest.fixture
def aggregator() -> MagicMock:
    agg = MagicMock()
    agg.aggregate = AsyncMock(side_effect=result_for)
    return agg


@pytest.fixture
def resolver() -> MagicMock:
    async def resolve(question: Question) -> Enrichment:
        question.answer = "Answer."
        return Enrichment(question=question, media=MEDIA)

    res = MagicMock()
    res.resolve = AsyncMock(side_effect=resolve)
    return res


@pytest.fixture
def simplifier() -> MagicMock:
    chain = MagicMock()
    chain.simplify = AsyncMock(return_value="Easy words.")
    return chain


@pytest.fixture
def history() -> InMemoryHistory:
    return InMemoryHistory()


@pytest.fixture
def controller(
    aggregator: MagicMock,
    resolver: MagicMock,
    simplifier: MagicMock,
    history: InMemoryHistory,
) -> SessionController:
    return SessionController(aggregator, resolver, simplifier, history)


class TestLoadAndSubmit:
    async def test_load_without_query_replaces_home(
        self, controller: SessionController, history: InMemoryHistory, aggregator: MagicMock
    ) -> None:
        await controller.load("https://aiwiki.test/")

        assert controller.state.view is View.HOME
        assert history.entries == [HistoryEntry(View.HOME, "")]
        aggregator.aggregate.assert_not_called()

    async def test_load_with_query_goes_straight_to_results(
        self, controller: SessionController, history: InMemoryHistory
    ) -> None:
        await controller.load("https://aiwiki.test/?q=black%20hole")

        state = controller.state
        assert state.view is View.RESULTS
        assert state.query == "black hole"
        assert state.draft == "black hole"
        assert state.overview == Overview(text="About black hole.", title="Black Hole")
        assert len(state.questions) == 3
        assert state.is_loading is False
        assert history.entries == [HistoryEntry(View.RESULTS, "black hole")]

    async def test_submit_pushes_and_aggregates(
        self, controller: SessionController, history: InMemoryHistory, aggregator: MagicMock
    ) -> None:
        await controller.load()
        await controller.submit("  cats ")

        assert controller.state.query == "cats"
        assert history.url == "?q=cats"
        assert len(history) == 2
        aggregator.aggregate.assert_awaited_once_with("cats")

    async def test_submit_defaults_to_draft(
        self, controller: SessionController, aggregator: MagicMock
    ) -> None:
        await controller.load()
        controller.set_draft("dogs")
        await controller.submit()

        aggregator.aggregate.assert_awaited_once_with("dogs")

    async def test_blank_submit_does_nothing(
        self, controller: SessionController, history: InMemoryHistory, aggregator: MagicMock
    ) -> None:
        await controller.load()
        await controller.submit("   ")

        assert controller.state.view is View.HOME
        assert len(history) == 1
        aggregator.aggregate.assert_not_called()

    async def test_pick_suggestion_searches(
        self, controller: SessionController, aggregator: MagicMock
    ) -> None:
        await controller.load()
        await controller.pick_suggestion("Black Hole")

        assert controller.state.query == "Black Hole"
        aggregator.aggregate.assert_awaited_once_with("Black Hole")

    async def test_aggregation_error_sets_message(
        self, controller: SessionController, aggregator: MagicMock
    ) -> None:
        aggregator.aggregate.side_effect = AggregationError("Failed to fetch results.")

        await controller.submit("cats")

        assert controller.state.error == "Failed to fetch results."
        assert controller.state.overview is None
        assert controller.state.is_loading is False

    async def test_new_search_clears_previous_error(
        self, controller: SessionController, aggregator: MagicMock
    ) -> None:
        aggregator.aggregate.side_effect = [AggregationError("boom"), result_for("dogs")]

        await controller.submit("cats")
        await controller.submit("dogs")

        assert controller.state.error is None
        assert controller.state.overview is not None


class TestLastQueryWins:
    async def test_stale_results_are_discarded(
        self, controller: SessionController, aggregator: MagicMock
    ) -> None:
        release = asyncio.Event()

        async def aggregate(topic: str) -> AggregationResult:
            if topic == "slow":
                await release.wait()
            return result_for(topic)

        aggregator.aggregate.side_effect = aggregate

        slow = asyncio.create_task(controller.submit("slow"))
        await asyncio.sleep(0)
        await controller.submit("fast")
        release.set()
        await slow

        state = controller.state
        assert state.query == "fast"
        assert state.overview is not None
        assert state.overview.text == "About fast."
        assert state.is_loading is False

    async def test_stale_error_is_discarded(
        self, controller: SessionController, aggregator: MagicMock
    ) -> None:
        release = asyncio.Event()

        async def aggregate(topic: str) -> AggregationResult:
            if topic == "slow":
                await release.wait()
                raise AggregationError("too late")
            return result_for(topic)

        aggregator.aggregate.side_effect = aggregate

        slow = asyncio.create_task(controller.submit("slow"))
        await asyncio.sleep(0)
        await controller.submit("fast")
        release.set()
        await slow

        assert controller.state.error is None
        assert controller.state.overview is not None


class TestModal:
    async def _open_first(self, controller: SessionController) -> Question:
        await controller.load("?q=cats")
        question = controller.state.questions[0]
        await controller.open_question(question)
        return question

    async def test_open_pushes_one_entry_and_enriches(
        self, controller: SessionController, history: InMemoryHistory
    ) -> None:
        question = await self._open_first(controller)

        assert len(history) == 2
        assert history.current == HistoryEntry(View.RESULTS, "cats", is_modal=True)
        assert controller.state.selected_question is question
        assert controller.state.media == MEDIA
        assert controller.state.is_modal_loading is False
        assert question.answer == "Answer."

    async def test_open_another_while_open_keeps_depth(
        self, controller: SessionController, history: InMemoryHistory, resolver: MagicMock
    ) -> None:
        await self._open_first(controller)
        other = controller.state.questions[1]

        await controller.open_question(other)

        assert len(history) == 2
        assert controller.state.selected_question is other
        assert resolver.resolve.await_count == 2

    async def test_close_goes_back_once(
        self, aggregator: MagicMock, resolver: MagicMock, simplifier: MagicMock
    ) -> None:
        history = MagicMock()
        history.current = HistoryEntry(View.RESULTS, "cats")
        controller = SessionController(aggregator, resolver, simplifier, history)
        await controller.submit("cats")
        await controller.open_question(controller.state.questions[0])
        history.current = HistoryEntry(View.RESULTS, "cats", is_modal=True)

        await controller.close_modal()

        history.back.assert_called_once_with()
        # State is left to the popstate that follows.
        assert controller.state.modal_open is True

    async def test_close_then_popstate_restores_results(
        self,
        controller: SessionController,
        history: InMemoryHistory,
        aggregator: MagicMock,
    ) -> None:
        await self._open_first(controller)

        await controller.close_modal()
        await controller.on_popstate(history.current, history.url)

        state = controller.state
        assert state.modal_open is False
        assert state.query == "cats"
        assert state.media.is_empty
        assert len(state.questions) == 3
        assert history.current == HistoryEntry(View.RESULTS, "cats")
        aggregator.aggregate.assert_awaited_once()

    async def test_popping_modal_entry_leaves_query(
        self, controller: SessionController, aggregator: MagicMock
    ) -> None:
        await self._open_first(controller)

        await controller.on_popstate(HistoryEntry(View.RESULTS, "cats", is_modal=True))

        assert controller.state.modal_open is False
        assert controller.state.query == "cats"
        aggregator.aggregate.assert_awaited_once()

    async def test_close_without_modal_entry_closes_directly(
        self, controller: SessionController, history: InMemoryHistory
    ) -> None:
        await self._open_first(controller)
        history.replace(HistoryEntry(View.RESULTS, "cats"))

        await controller.close_modal()

        assert controller.state.modal_open is False
        assert len(history) == 2

    async def test_stale_enrichment_is_not_committed(
        self, controller: SessionController, resolver: MagicMock
    ) -> None:
        await controller.load("?q=cats")
        release = asyncio.Event()

        async def resolve(question: Question) -> Enrichment:
            await release.wait()
            return Enrichment(question=question, media=MEDIA)

        resolver.resolve.side_effect = resolve
        opening = asyncio.create_task(controller.open_question(controller.state.questions[0]))
        await asyncio.sleep(0)
        await controller.on_popstate(HistoryEntry(View.RESULTS, "cats", is_modal=True))
        release.set()
        await opening

        assert controller.state.selected_question is None
        assert controller.state.media.is_empty

    async def test_back_to_other_query_reaggregates(
        self, controller: SessionController, history: InMemoryHistory, aggregator: MagicMock
    ) -> None:
        await controller.load("?q=cats")
        await controller.submit("dogs")

        await controller.on_popstate(history.back(), history.url)

        assert controller.state.query == "cats"
        assert controller.state.overview is not None
        assert controller.state.overview.text == "About cats."
        assert aggregator.aggregate.await_count == 3


class TestKeys:
    async def test_slash_focus_target(self, controller: SessionController) -> None:
        await controller.load()
        assert await controller.on_key("/") is FocusTarget.HOME

        await controller.submit("cats")
        assert await controller.on_key("/") is FocusTarget.HEADER
        assert await controller.on_key("/", typing=True) is None

    async def test_escape_clears_draft(self, controller: SessionController) -> None:
        await controller.load("?q=cats")
        controller.set_draft("cats and dogs")

        await controller.on_key("Escape")

        assert controller.state.draft == ""
        assert controller.state.query == "cats"

    async def test_escape_closes_modal_through_history(
        self, controller: SessionController, history: InMemoryHistory
    ) -> None:
        await controller.load("?q=cats")
        await controller.open_question(controller.state.questions[0])

        await controller.on_key("Escape")

        assert history.current == HistoryEntry(View.RESULTS, "cats")


class TestSimplify:
    async def test_overview_uses_title_hint(
        self, controller: SessionController, simplifier: MagicMock
    ) -> None:
        await controller.load("?q=cats")

        result = await controller.simplify_overview()

        assert result == "Easy words."
        assert controller.state.overview_simplified == "Easy words."
        simplifier.simplify.assert_awaited_once_with("About cats.", title_hint="Cats")

    async def test_overview_missing(self, controller: SessionController) -> None:
        assert await controller.simplify_overview() == NOT_ENOUGH_INFO
        assert controller.state.overview_simplified == NOT_ENOUGH_INFO

    async def test_answer_uses_question_hints(
        self, controller: SessionController, simplifier: MagicMock
    ) -> None:
        await controller.load("?q=cats")
        question = controller.state.questions[0]
        await controller.open_question(question)

        result = await controller.simplify_answer()

        assert result == "Easy words."
        assert controller.state.answer_simplified == "Easy words."
        simplifier.simplify.assert_awaited_once_with(
            "Answer.", title_hint="cats 0", alternates=["What is cats 0?"]
        )

    async def test_answer_without_selection(self, controller: SessionController) -> None:
        assert await controller.simplify_answer() == NOT_ENOUGH_INFO

    async def test_new_search_drops_simplified_overview(
        self, controller: SessionController
    ) -> None:
        await controller.load("?q=cats")
        await controller.simplify_overview()

        await controller.submit("dogs")

        assert controller.state.overview_simplified is None


async def test_unwritable_run_log_keeps_session_usable(
    resolver: MagicMock, simplifier: MagicMock, history: InMemoryHistory, tmp_path: Path
) -> None:
    log_dir = tmp_path / "logs"
    log_dir.write_text("not a directory")
    summaries = MagicMock()
    summaries.summary_by_search = AsyncMock(return_value=Summary(text="Cats purr.", title="Cat"))
    questions = MagicMock()
    questions.related_questions = AsyncMock(return_value=[Question.from_title("Kitten")])
    suggestions = MagicMock()
    suggestions.title_suggestions = AsyncMock(return_value=[])
    aggregator = TopicAggregator(
        summaries, questions, suggestions, run_logger=RunLogger(log_dir=log_dir)
    )
    controller = SessionController(aggregator, resolver, simplifier, history)

    await controller.submit("cats")

    state = controller.state
    assert state.is_loading is False
    assert state.error is None
    assert state.overview is not None
    assert [q.question for q in state.questions] == ["What is Kitten?"]
