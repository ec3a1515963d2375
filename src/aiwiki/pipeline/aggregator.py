"""Topic aggregation: overview + related questions, backfilled to a fixed count."""

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from aiwiki.data import AggregationResult, Overview, Question, Summary
from aiwiki.dedup import dedupe_by_key, truncate
from aiwiki.run_logger import RunLogger
from aiwiki.sources.base import QuestionSource, SuggestionSource, SummarySource

logger = logging.getLogger(__name__)

MAX_QUESTIONS = 20
MAX_SUGGESTIONS = 8


class AggregationError(Exception):
    """Raised when neither the overview nor the question fetch could complete."""


@dataclass
class _Stage:
    stage: str
    component: str
    input_data: Any
    output_data: Any
    duration_seconds: float


class TopicAggregator:
    """Aggregate an overview and a ranked question list for a topic.

    Flow:
    1. Overview summary and related questions are fetched concurrently
    2. Short question lists are backfilled from title suggestions
    3. The merged list is deduplicated and capped
    4. If nothing at all was found, "did you mean" suggestions are fetched

    Args:
        summaries: Primary encyclopedia summary source.
        questions: Related-topic question source.
        suggestions: Title suggestion source used for backfill and not-found.
        max_questions: Cap on the question list.
        max_suggestions: Cap on not-found suggestions.
        run_logger: Optional RunLogger for intermediate result logging.
    """

    def __init__(
        self,
        summaries: SummarySource,
        questions: QuestionSource,
        suggestions: SuggestionSource,
        *,
        max_questions: int = MAX_QUESTIONS,
        max_suggestions: int = MAX_SUGGESTIONS,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._summaries = summaries
        self._questions = questions
        self._suggestions = suggestions
        self._max_questions = max_questions
        self._max_suggestions = max_suggestions
        self._run_logger = run_logger

    @property
    def max_questions(self) -> int:
        return self._max_questions

    async def aggregate(self, topic: str) -> AggregationResult:
        """Run the aggregation for ``topic``.

        Args:
            topic: The user's search topic.

        Returns:
            Aggregated overview, questions and not-found state.

        Raises:
            ValueError: If ``topic`` is blank.
            AggregationError: If both the overview and question fetches failed.
        """
        topic = topic.strip()
        if not topic:
            raise ValueError("Topic must not be empty")

        started_at = datetime.now(tz=UTC)
        stages: list[_Stage] = []

        # Step 1: overview and related questions in parallel
        t0 = time.monotonic()
        summary_result, questions_result = await asyncio.gather(
            self._summaries.summary_by_search(topic),
            self._questions.related_questions(topic, max_questions=self._max_questions),
            return_exceptions=True,
        )
        fetch_duration = time.monotonic() - t0

        if isinstance(summary_result, BaseException) and isinstance(
            questions_result, BaseException
        ):
            logger.warning(
                f"Aggregation for {topic!r} failed: overview: {summary_result}; "
                f"questions: {questions_result}"
            )
            raise AggregationError(f"Failed to fetch results for “{topic}”.")

        summary: Summary | None = None
        if isinstance(summary_result, BaseException):
            logger.warning(f"Error fetching overview: {str(summary_result)}")
        else:
            summary = summary_result

        questions: list[Question] = []
        if isinstance(questions_result, BaseException):
            logger.warning(f"Error fetching related questions: {str(questions_result)}")
        else:
            questions = dedupe_by_key(questions_result, key=lambda q: q.question)

        overview = Overview.from_summary(summary) if summary and summary.text.strip() else None
        stages.append(
            _Stage("overview", type(self._summaries).__name__, topic, overview, fetch_duration)
        )
        stages.append(
            _Stage("questions", type(self._questions).__name__, topic, questions, fetch_duration)
        )

        # Step 2: backfill from suggestions
        if len(questions) < self._max_questions:
            t0 = time.monotonic()
            backfill = await self._backfill(topic, questions)
            questions = questions + backfill
            stages.append(
                _Stage(
                    "backfill",
                    type(self._suggestions).__name__,
                    topic,
                    backfill,
                    time.monotonic() - t0,
                )
            )

        # Step 3: cap
        questions = truncate(questions, self._max_questions)

        # Step 4: not found
        not_found = overview is None and not questions
        suggestions: list[str] = []
        if not_found:
            t0 = time.monotonic()
            suggestions = await self._fetch_suggestions(topic, self._max_suggestions)
            suggestions = truncate(suggestions, self._max_suggestions)
            stages.append(
                _Stage(
                    "not_found",
                    type(self._suggestions).__name__,
                    topic,
                    suggestions,
                    time.monotonic() - t0,
                )
            )

        result = AggregationResult(
            topic=topic,
            overview=overview,
            questions=questions,
            not_found=not_found,
            suggestions=suggestions,
        )
        self._write_run_log(topic, started_at, stages, result)
        return result

    async def _backfill(self, topic: str, questions: list[Question]) -> list[Question]:
        """Turn title suggestions into questions until the cap is reached."""
        needed = self._max_questions - len(questions)
        titles = await self._fetch_suggestions(topic, self._max_questions * 2)

        taken_guesses = {q.title_guess.lower() for q in questions if q.title_guess}
        taken_keys = {q.key for q in questions}

        backfill: list[Question] = []
        for title in titles:
            if len(backfill) >= needed:
                break
            candidate = Question.from_title(title, title_guess=title)
            if title.lower() in taken_guesses or candidate.key in taken_keys:
                continue
            taken_guesses.add(title.lower())
            taken_keys.add(candidate.key)
            backfill.append(candidate)
        return backfill

    async def _fetch_suggestions(self, topic: str, max_results: int) -> list[str]:
        try:
            return await self._suggestions.title_suggestions(topic, max_results=max_results)
        except Exception as e:
            logger.warning(f"Error fetching title suggestions: {str(e)}")
            return []

    def _write_run_log(
        self,
        topic: str,
        started_at: datetime,
        stages: list[_Stage],
        result: AggregationResult,
    ) -> None:
        # Written in one synchronous burst so overlapping runs never share a record.
        if not self._run_logger:
            return
        self._run_logger.start_run("aggregate", topic, started_at=started_at)
        for s in stages:
            self._run_logger.log_stage(
                stage=s.stage,
                component=s.component,
                input_data=s.input_data,
                output_data=s.output_data,
                duration_seconds=s.duration_seconds,
            )
        try:
            self._run_logger.finish_run(result.questions, not_found=result.not_found)
        except OSError as e:
            logger.warning(f"Could not write run log for {topic!r}: {str(e)}")
