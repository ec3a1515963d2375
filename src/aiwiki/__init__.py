"""AI-Wiki: topic overviews, related questions, and kid-friendly rewrites."""

from aiwiki.config import AIWikiConfig, create_from_config, load_config
from aiwiki.data import (
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
)
from aiwiki.dedup import dedupe_by_key, truncate
from aiwiki.navigation import History, InMemoryHistory, NavState, transition
from aiwiki.pipeline import AggregationError, EnrichmentResolver, TopicAggregator
from aiwiki.run_logger import RunLogger
from aiwiki.session import SessionController
from aiwiki.simplify import (
    NOT_ENOUGH_INFO,
    ClaudeRewriter,
    EndpointRewriter,
    OllamaRewriter,
    Rewriter,
    SimplifierChain,
    simplify_locally,
)
from aiwiki.sources import (
    DuckDuckGoSource,
    MediaSource,
    QuestionSource,
    SuggestionSource,
    SummarySource,
    WikipediaSource,
)

__all__ = [
    # Models
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
    # Functions
    "dedupe_by_key",
    "simplify_locally",
    "transition",
    "truncate",
    # Protocols
    "History",
    "MediaSource",
    "QuestionSource",
    "Rewriter",
    "SuggestionSource",
    "SummarySource",
    # Sources
    "DuckDuckGoSource",
    "WikipediaSource",
    # Rewriters
    "ClaudeRewriter",
    "EndpointRewriter",
    "NOT_ENOUGH_INFO",
    "OllamaRewriter",
    # Pipeline
    "AggregationError",
    "EnrichmentResolver",
    "SimplifierChain",
    "TopicAggregator",
    # Session
    "InMemoryHistory",
    "NavState",
    "SessionController",
    # Logging
    "RunLogger",
    # Config
    "AIWikiConfig",
    "create_from_config",
    "load_config",
]
