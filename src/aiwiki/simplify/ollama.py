"""Simplification through a local Ollama chat model."""

import httpx

from aiwiki.simplify.base import DEFAULT_SYSTEM_PROMPT, USER_PROMPT_PREFIX

DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "llama3.1:8b-instruct"


def extract_reply(data: object) -> str:
    """Pull the reply text out of an Ollama response.

    Chat responses carry ``message.content``; generate-style and proxy
    responses use ``response`` or ``result``.
    """
    if not isinstance(data, dict):
        return ""
    message = data.get("message")
    candidates = (
        message.get("content") if isinstance(message, dict) else None,
        data.get("result"),
        data.get("response"),
    )
    for candidate in candidates:
        if isinstance(candidate, str):
            return candidate.strip()
    return ""


class OllamaRewriter:
    """Rewrite text for young readers with an Ollama-hosted model.

    Args:
        base_url: Ollama server URL.
        model: Model tag to run.
        temperature: Sampling temperature.
        num_ctx: Context window passed to the model.
        system_prompt: Rewriting instruction.
        client: Optional shared HTTP client.
        timeout: Request timeout for self-managed clients.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_OLLAMA_URL,
        model: str = DEFAULT_OLLAMA_MODEL,
        temperature: float = 0.2,
        num_ctx: int = 4096,
        system_prompt: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 120.0,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}/api/chat"
        self._model = model
        self._temperature = temperature
        self._num_ctx = num_ctx
        self._system_prompt = system_prompt or DEFAULT_SYSTEM_PROMPT
        self._client = client
        self._timeout = timeout

    async def rewrite(self, text: str) -> str:
        body = {
            "model": self._model,
            "stream": False,
            "messages": [
                {"role": "system", "content": self._system_prompt},
                {"role": "user", "content": USER_PROMPT_PREFIX + text},
            ],
            "options": {"temperature": self._temperature, "num_ctx": self._num_ctx},
        }
        if self._client is not None:
            response = await self._client.post(self._url, json=body)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._url, json=body)
        response.raise_for_status()
        return extract_reply(response.json())
