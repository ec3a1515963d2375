import os

import anthropic
from anthropic.types import TextBlock

from aiwiki.simplify.base import DEFAULT_SYSTEM_PROMPT, USER_PROMPT_PREFIX


class ClaudeRewriter:
    """Rewrite text for young readers using Anthropic's Claude API.

    Args:
        model: Anthropic model ID to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        system_prompt: Rewriting instruction. If *None*, the built-in
            default is used.
        max_tokens: Upper bound on the rewritten text length.
    """

    def __init__(
        self,
        *,
        model: str = "claude-haiku-4-5-20251001",
        api_key: str | None = None,
        system_prompt: str | None = None,
        max_tokens: int = 1024,
    ) -> None:
        self._model = model
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key)
        self._system_prompt = system_prompt or DEFAULT_SYSTEM_PROMPT
        self._max_tokens = max_tokens

    async def rewrite(self, text: str) -> str:
        response = await self._client.messages.create(
            model=self._model,
            max_tokens=self._max_tokens,
            temperature=0.2,
            system=self._system_prompt,
            messages=[{"role": "user", "content": USER_PROMPT_PREFIX + text}],
        )

        content_block = response.content[0]
        if not isinstance(content_block, TextBlock):
            raise ValueError(f"Expected TextBlock, got {type(content_block).__name__}")
        return content_block.text.strip()
