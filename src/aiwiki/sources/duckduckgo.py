"""Related-topic discovery via the DuckDuckGo Instant Answer API."""

import logging
import re
from typing import Any
from urllib.parse import unquote

import httpx

from aiwiki.data import Question
from aiwiki.dedup import dedupe_by_key, truncate
from aiwiki.sources.base import DEFAULT_USER_AGENT, HTTPSource, dig, str_or_none

logger = logging.getLogger(__name__)

DDG_API_URL = "https://api.duckduckgo.com/"

# Checked in priority order; the first separator present wins.
_SEPARATORS = (" — ", " – ", " - ", ": ")
_WIKI_LINK = re.compile(r"wikipedia\.org/wiki/([^#?]+)", re.IGNORECASE)


def split_title(text: str) -> tuple[str, str]:
    """Split a related-topic blurb into ``(title, snippet)``."""
    for sep in _SEPARATORS:
        if sep in text:
            title, _, snippet = text.partition(sep)
            return (title.strip(), snippet.strip())
    return (text.strip(), "")


def title_from_wiki_url(url: str) -> str | None:
    """Extract the page title from a ``wikipedia.org/wiki/<Page>`` link."""
    match = _WIKI_LINK.search(url)
    if not match:
        return None
    title = unquote(match.group(1)).replace("_", " ").strip()
    return title or None


def _flatten_topics(related: Any) -> list[dict[str, Any]]:
    """Flatten one level of ``{"Name": ..., "Topics": [...]}`` groups."""
    if not isinstance(related, list):
        return []
    flat: list[dict[str, Any]] = []
    for item in related:
        if not isinstance(item, dict):
            continue
        group = item.get("Topics")
        if isinstance(group, list):
            flat.extend(t for t in group if isinstance(t, dict))
        else:
            flat.append(item)
    return flat


class DuckDuckGoSource(HTTPSource):
    """Build question cards from DuckDuckGo related topics.

    Args:
        api_url: Instant Answer API endpoint.
        client: Optional shared HTTP client.
        timeout: Request timeout for self-managed clients.
        user_agent: User-Agent header.
    """

    def __init__(
        self,
        *,
        api_url: str = DDG_API_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(client=client, timeout=timeout, user_agent=user_agent)
        self._api_url = api_url

    async def related_questions(self, topic: str, *, max_questions: int = 20) -> list[Question]:
        """Return up to ``max_questions`` answer-less questions related to ``topic``.

        Args:
            topic: The user's search topic.
            max_questions: Cap on returned questions.

        Returns:
            Questions deduplicated by case-insensitive text, in API order.
        """
        data = await self._get_json(
            self._api_url,
            params={
                "q": topic,
                "format": "json",
                "no_redirect": 1,
                "no_html": 1,
                "skip_disambig": 1,
            },
        )

        questions: list[Question] = []
        for entry in _flatten_topics(dig(data, "RelatedTopics")):
            text = entry.get("Text")
            if not isinstance(text, str) or not text.strip():
                continue
            title, _snippet = split_title(text)
            if not title:
                continue

            source_url = str_or_none(entry.get("FirstURL"))
            title_guess = (title_from_wiki_url(source_url) if source_url else None) or title
            questions.append(
                Question.from_title(title, source_url=source_url, title_guess=title_guess)
            )

        unique = dedupe_by_key(questions, key=lambda q: q.question)
        logger.debug("DuckDuckGo returned %d related questions for %r", len(unique), topic)
        return truncate(unique, max_questions)
