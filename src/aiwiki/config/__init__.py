"""Configuration module for AI-Wiki."""

from aiwiki.config.factory import create_from_config, create_rewriter, create_wikipedia
from aiwiki.config.loader import get_default_config_path, load_config
from aiwiki.config.models import (
    AIWikiConfig,
    ClaudeRewriterConfig,
    DuckDuckGoConfig,
    EndpointRewriterConfig,
    LimitsConfig,
    LoggingConfig,
    NoRewriterConfig,
    OllamaRewriterConfig,
    RewriterConfig,
    WikipediaConfig,
)

__all__ = [
    "AIWikiConfig",
    "ClaudeRewriterConfig",
    "DuckDuckGoConfig",
    "EndpointRewriterConfig",
    "LimitsConfig",
    "LoggingConfig",
    "NoRewriterConfig",
    "OllamaRewriterConfig",
    "RewriterConfig",
    "WikipediaConfig",
    "create_from_config",
    "create_rewriter",
    "create_wikipedia",
    "get_default_config_path",
    "load_config",
]
