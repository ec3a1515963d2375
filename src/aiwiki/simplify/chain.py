"""Tiered simplification: remote rewriter, simple encyclopedia, local heuristic."""

import logging
import re
from collections.abc import Awaitable, Callable, Sequence

from aiwiki.simplify.base import NOT_ENOUGH_INFO, Rewriter
from aiwiki.simplify.local import simplify_locally
from aiwiki.sources.base import SummarySource

logger = logging.getLogger(__name__)

MIN_TEXT_CHARS = 40
MAX_TEXT_CHARS = 20000
MAX_TOPIC_CHARS = 300

_FIRST_SENTENCE = re.compile(r"^(.+?[.!?])(?:\s|$)", re.DOTALL)

Attempt = Callable[[], Awaitable[str | None]]


def leading_topic(text: str) -> str:
    """Use the first sentence of ``text`` as a search query."""
    stripped = text.strip()
    match = _FIRST_SENTENCE.match(stripped)
    sentence = match.group(1) if match else stripped
    return sentence[:MAX_TOPIC_CHARS].strip()


class SimplifierChain:
    """Simplify text through an ordered list of fallbacks.

    Tiers run in order and the first non-empty result wins:

    1. ``rewriter`` (remote model); skipped when None or the text is too long.
    2. ``simple_source`` summary lookup (e.g. Simple English Wikipedia).
    3. :func:`simplify_locally`.

    Text shorter than ``min_chars`` after trimming short-circuits to
    :data:`NOT_ENOUGH_INFO` without touching any tier.

    Args:
        rewriter: Primary remote rewriter.
        simple_source: Summary source in simplified language.
        min_chars: Shortest text worth simplifying.
        max_chars: Longest text the remote rewriter accepts.
    """

    def __init__(
        self,
        rewriter: Rewriter | None = None,
        simple_source: SummarySource | None = None,
        *,
        min_chars: int = MIN_TEXT_CHARS,
        max_chars: int = MAX_TEXT_CHARS,
    ) -> None:
        self._rewriter = rewriter
        self._simple_source = simple_source
        self._min_chars = min_chars
        self._max_chars = max_chars

    async def simplify(
        self,
        text: str,
        *,
        title_hint: str | None = None,
        alternates: Sequence[str] = (),
    ) -> str:
        """Return a simplified version of ``text``. Never raises.

        Args:
            text: Text to simplify.
            title_hint: Canonical page title to look up in the simple source.
            alternates: Further lookup keys tried after ``title_hint``.

        Returns:
            Non-empty simplified text.
        """
        if len(text.strip()) < self._min_chars:
            return NOT_ENOUGH_INFO

        attempts: list[tuple[str, Attempt]] = [
            ("rewriter", lambda: self._from_rewriter(text)),
            ("simple_source", lambda: self._from_simple_source(text, title_hint, alternates)),
            ("local", lambda: self._from_local(text)),
        ]
        for name, attempt in attempts:
            try:
                result = await attempt()
            except Exception as e:
                logger.warning("Simplifier tier %s failed: %s", name, e)
                continue
            if result and result.strip():
                logger.debug("Simplified with tier %s", name)
                return result.strip()

        return NOT_ENOUGH_INFO

    async def _from_rewriter(self, text: str) -> str | None:
        if self._rewriter is None:
            return None
        if len(text) > self._max_chars:
            logger.info(
                "Text has %d chars (limit %d); not sending to rewriter",
                len(text),
                self._max_chars,
            )
            return None
        return await self._rewriter.rewrite(text)

    async def _from_simple_source(
        self,
        text: str,
        title_hint: str | None,
        alternates: Sequence[str],
    ) -> str | None:
        if self._simple_source is None:
            return None
        keys = [k.strip() for k in (title_hint, *alternates) if k and k.strip()]
        if not keys:
            keys = [leading_topic(text)]
        for key in keys:
            summary = await self._simple_source.summary_by_search(key)
            if summary is not None and summary.text.strip():
                return summary.text
        return None

    async def _from_local(self, text: str) -> str | None:
        return simplify_locally(text)
