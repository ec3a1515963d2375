"""Pydantic configuration models for AI-Wiki components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from aiwiki.sources.base import DEFAULT_USER_AGENT

# ============================================================
# Source Configs
# ============================================================


class WikipediaConfig(BaseModel):
    """Configuration for the Wikipedia adapters."""

    lang: str = "en"
    simple_lang: str = "simple"
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 30.0
    media_batch_size: int = Field(default=10, ge=1, le=50)

    model_config = {"frozen": True}


class DuckDuckGoConfig(BaseModel):
    """Configuration for DuckDuckGo related-topic discovery."""

    api_url: str = "https://api.duckduckgo.com/"
    timeout: float = 30.0

    model_config = {"frozen": True}


# ============================================================
# Rewriter Configs
# ============================================================


class EndpointRewriterConfig(BaseModel):
    """Configuration for EndpointRewriter."""

    type: Literal["endpoint"] = "endpoint"
    url: str = "http://localhost:3001/api/eli5"
    timeout: float = 60.0

    model_config = {"frozen": True}


class OllamaRewriterConfig(BaseModel):
    """Configuration for OllamaRewriter."""

    type: Literal["ollama"] = "ollama"
    base_url: str = "http://localhost:11434"
    model: str = "llama3.1:8b-instruct"
    temperature: float = 0.2
    num_ctx: int = 4096
    timeout: float = 120.0

    model_config = {"frozen": True}


class ClaudeRewriterConfig(BaseModel):
    """Configuration for ClaudeRewriter."""

    type: Literal["claude"] = "claude"
    model: str = "claude-haiku-4-5-20251001"
    system_prompt: str | None = None

    model_config = {"frozen": True}


class NoRewriterConfig(BaseModel):
    """Skip the remote tier; simplify from Simple Wikipedia or locally."""

    type: Literal["none"] = "none"

    model_config = {"frozen": True}


RewriterConfig = Annotated[
    EndpointRewriterConfig | OllamaRewriterConfig | ClaudeRewriterConfig | NoRewriterConfig,
    Field(discriminator="type"),
]


# ============================================================
# Limits
# ============================================================


class LimitsConfig(BaseModel):
    """Caps and thresholds for aggregation, media and simplification."""

    max_questions: int = Field(default=20, ge=1)
    max_media: int = Field(default=12, ge=1)
    max_suggestions: int = Field(default=8, ge=0)
    min_simplify_chars: int = Field(default=40, ge=0)
    max_simplify_chars: int = Field(default=20000, ge=1)

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for JSON run logs of aggregations."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class AIWikiConfig(BaseModel):
    """Root configuration for AI-Wiki."""

    wikipedia: WikipediaConfig = Field(default_factory=WikipediaConfig)
    duckduckgo: DuckDuckGoConfig = Field(default_factory=DuckDuckGoConfig)
    rewriter: RewriterConfig = Field(default_factory=EndpointRewriterConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
