"""Data models for AI-Wiki."""

from aiwiki.data.models import (
    AggregationResult,
    Enrichment,
    HistoryEntry,
    ImageItem,
    MediaResult,
    Overview,
    Question,
    SessionState,
    Summary,
    VideoItem,
    View,
    phrase_question,
    strip_question,
)

__all__ = [
    "AggregationResult",
    "Enrichment",
    "HistoryEntry",
    "ImageItem",
    "MediaResult",
    "Overview",
    "Question",
    "SessionState",
    "Summary",
    "VideoItem",
    "View",
    "phrase_question",
    "strip_question",
]
