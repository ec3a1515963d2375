"""Factory functions to create components from configuration."""

from pathlib import Path

import httpx

from aiwiki.config.models import (
    AIWikiConfig,
    ClaudeRewriterConfig,
    EndpointRewriterConfig,
    NoRewriterConfig,
    OllamaRewriterConfig,
    RewriterConfig,
)
from aiwiki.navigation.history import History, InMemoryHistory
from aiwiki.pipeline.aggregator import TopicAggregator
from aiwiki.pipeline.enrichment import EnrichmentResolver
from aiwiki.run_logger import RunLogger
from aiwiki.session import SessionController
from aiwiki.simplify.base import Rewriter
from aiwiki.simplify.chain import SimplifierChain
from aiwiki.simplify.claude import ClaudeRewriter
from aiwiki.simplify.endpoint import EndpointRewriter
from aiwiki.simplify.ollama import OllamaRewriter
from aiwiki.sources.duckduckgo import DuckDuckGoSource
from aiwiki.sources.wikipedia import WikipediaSource


def create_rewriter(
    config: RewriterConfig,
    client: httpx.AsyncClient | None = None,
) -> Rewriter | None:
    """Create the primary rewriter from config.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, EndpointRewriterConfig):
        return EndpointRewriter(url=config.url, client=client, timeout=config.timeout)
    if isinstance(config, OllamaRewriterConfig):
        return OllamaRewriter(
            base_url=config.base_url,
            model=config.model,
            temperature=config.temperature,
            num_ctx=config.num_ctx,
            client=client,
            timeout=config.timeout,
        )
    if isinstance(config, ClaudeRewriterConfig):
        return ClaudeRewriter(model=config.model, system_prompt=config.system_prompt)
    if isinstance(config, NoRewriterConfig):
        return None
    msg = f"Unknown rewriter config type: {type(config)}"
    raise ValueError(msg)


def create_wikipedia(
    config: AIWikiConfig,
    *,
    simple: bool = False,
    client: httpx.AsyncClient | None = None,
) -> WikipediaSource:
    """Create the primary (or simplified-language) Wikipedia source."""
    wiki = config.wikipedia
    return WikipediaSource(
        lang=wiki.simple_lang if simple else wiki.lang,
        client=client,
        timeout=wiki.timeout,
        user_agent=wiki.user_agent,
        media_batch_size=wiki.media_batch_size,
    )


def create_from_config(
    config: AIWikiConfig,
    *,
    history: History | None = None,
    client: httpx.AsyncClient | None = None,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[SessionController, RunLogger | None]:
    """Create a complete session controller from root config.

    Args:
        config: Root configuration.
        history: History stack; defaults to a fresh InMemoryHistory.
        client: Shared HTTP client for every adapter. When None, each
            request opens its own client.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (controller, run_logger).
        run_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    limits = config.limits
    wikipedia = create_wikipedia(config, client=client)
    simple_wikipedia = create_wikipedia(config, simple=True, client=client)
    duckduckgo = DuckDuckGoSource(
        api_url=config.duckduckgo.api_url,
        client=client,
        timeout=config.duckduckgo.timeout,
        user_agent=config.wikipedia.user_agent,
    )

    aggregator = TopicAggregator(
        summaries=wikipedia,
        questions=duckduckgo,
        suggestions=wikipedia,
        max_questions=limits.max_questions,
        max_suggestions=limits.max_suggestions,
        run_logger=run_logger,
    )
    resolver = EnrichmentResolver(wikipedia, wikipedia, max_media=limits.max_media)
    simplifier = SimplifierChain(
        rewriter=create_rewriter(config.rewriter, client=client),
        simple_source=simple_wikipedia,
        min_chars=limits.min_simplify_chars,
        max_chars=limits.max_simplify_chars,
    )

    controller = SessionController(
        aggregator=aggregator,
        resolver=resolver,
        simplifier=simplifier,
        history=history if history is not None else InMemoryHistory(),
    )
    return (controller, run_logger)
