from aiwiki.sources.base import (
    HTTPSource,
    MediaSource,
    QuestionSource,
    SuggestionSource,
    SummarySource,
)
from aiwiki.sources.duckduckgo import DuckDuckGoSource
from aiwiki.sources.wikipedia import WikipediaSource, classify_media

__all__ = [
    "DuckDuckGoSource",
    "HTTPSource",
    "MediaSource",
    "QuestionSource",
    "SuggestionSource",
    "SummarySource",
    "WikipediaSource",
    "classify_media",
]
