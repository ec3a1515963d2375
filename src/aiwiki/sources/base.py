"""Protocols and shared HTTP plumbing for knowledge source adapters."""

import logging
from typing import Any, Protocol

import httpx

from aiwiki.data import MediaResult, Question, Summary

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "AIWiki/0.1 (topic explorer; https://github.com/aiwiki)"


class SummarySource(Protocol):
    """Interface for looking up the best-matching page summary for a query."""

    async def summary_by_search(self, query: str) -> Summary | None:
        """Search for the best title and return its summary.

        Args:
            query: Free-text query.

        Returns:
            Normalized summary, or None when nothing usable was found.
        """
        ...


class QuestionSource(Protocol):
    """Interface for discovering related sub-topics of a topic."""

    async def related_questions(self, topic: str, *, max_questions: int = 20) -> list[Question]:
        """Return answer-less questions about topics related to ``topic``."""
        ...


class SuggestionSource(Protocol):
    """Interface for title suggestions ("did you mean")."""

    async def title_suggestions(self, term: str, *, max_results: int = 30) -> list[str]: ...


class MediaSource(Protocol):
    """Interface for listing media attached to a page."""

    async def media(self, title: str, *, max_items: int = 12) -> MediaResult: ...


def dig(data: Any, *keys: str | int) -> Any:
    """Walk nested dicts/lists, returning None as soon as a step is missing.

    Example:
        ``dig(payload, "query", "search", 0, "title")``
    """
    current = data
    for key in keys:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
            current = current[key]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(key)
        if current is None:
            return None
    return current


def str_or_none(value: Any) -> str | None:
    """Return ``value`` if it is a non-empty string, else None."""
    if isinstance(value, str) and value.strip():
        return value
    return None


class HTTPSource:
    """Base for adapters that speak JSON over HTTP and fail soft.

    Args:
        client: Shared ``httpx.AsyncClient``. When None, a short-lived client
            is created for every request.
        timeout: Request timeout in seconds for self-managed clients.
        user_agent: User-Agent header sent with every request.
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._client = client
        self._timeout = timeout
        self._headers = {"User-Agent": user_agent, "Accept": "application/json"}

    async def _get_json(self, url: str, params: dict[str, str | int] | None = None) -> Any:
        """GET ``url`` and decode JSON.

        Returns:
            Decoded payload, or None on a non-2xx status, transport error,
            or undecodable body.
        """
        try:
            if self._client is not None:
                response = await self._client.get(url, params=params, headers=self._headers)
            else:
                async with httpx.AsyncClient(
                    timeout=self._timeout, follow_redirects=True
                ) as client:
                    response = await client.get(url, params=params, headers=self._headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", url, e)
            return None
        except ValueError as e:
            logger.warning("Invalid JSON from %s: %s", url, e)
            return None
