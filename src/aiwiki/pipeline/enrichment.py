"""On-demand answer and media resolution for an opened question."""

import logging

from aiwiki.data import Enrichment, MediaResult, Question, Summary, strip_question
from aiwiki.sources.base import MediaSource, SummarySource

logger = logging.getLogger(__name__)

MAX_MEDIA = 12
NO_SUMMARY = "No concise summary found."


class EnrichmentResolver:
    """Resolve a question's answer text, source URL and media.

    Text is resolved first because the media lookup needs the canonical
    page title it produces. Failures never reach the caller: a missing
    summary yields :data:`NO_SUMMARY` and missing media an empty result.

    Args:
        summaries: Summary source used to answer the question.
        media: Media source for images and videos.
        max_media: Cap on images returned per question.
    """

    def __init__(
        self,
        summaries: SummarySource,
        media: MediaSource,
        *,
        max_media: int = MAX_MEDIA,
    ) -> None:
        self._summaries = summaries
        self._media = media
        self._max_media = max_media

    async def resolve(self, question: Question) -> Enrichment:
        """Fill in ``question`` in place (once) and fetch its media.

        Args:
            question: The opened question. Its ``answer``, ``source_url`` and
                ``title_guess`` are set if it has not been answered yet.

        Returns:
            The question, the summary it was answered from, and its media.
        """
        key = question.title_guess or strip_question(question.question)

        summary: Summary | None = None
        if not question.is_answered:
            if key:
                summary = await self._lookup(key)
            if summary is None:
                summary = await self._lookup(question.question)

            question.answer = summary.text if summary else NO_SUMMARY
            if summary and summary.url:
                question.source_url = summary.url
            if question.title_guess is None and summary:
                question.title_guess = summary.title
            if summary and summary.title:
                question.canonical_title = summary.title

        media_title = question.canonical_title or key or question.question
        media = await self._fetch_media(media_title)
        return Enrichment(question=question, summary=summary, media=media)

    async def _lookup(self, query: str) -> Summary | None:
        try:
            return await self._summaries.summary_by_search(query)
        except Exception as e:
            logger.warning("Summary lookup for %r failed: %s", query, e)
            return None

    async def _fetch_media(self, title: str) -> MediaResult:
        try:
            return await self._media.media(title, max_items=self._max_media)
        except Exception as e:
            logger.warning("Media lookup for %r failed: %s", title, e)
            return MediaResult()
