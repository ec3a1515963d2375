"""Client for the AI-Wiki ``/api/eli5`` rewriting endpoint."""

import httpx

DEFAULT_ENDPOINT_URL = "http://localhost:3001/api/eli5"


class EndpointRewriter:
    """Send text to an HTTP rewriting endpoint.

    The endpoint accepts ``{"text": ...}`` and replies ``{"eli5": ...}``.

    Args:
        url: Endpoint URL.
        client: Optional shared HTTP client.
        timeout: Request timeout for self-managed clients.
    """

    def __init__(
        self,
        *,
        url: str = DEFAULT_ENDPOINT_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = 60.0,
    ) -> None:
        self._url = url
        self._client = client
        self._timeout = timeout

    async def rewrite(self, text: str) -> str:
        if self._client is not None:
            response = await self._client.post(self._url, json={"text": text})
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._url, json={"text": text})
        response.raise_for_status()

        data = response.json()
        eli5 = data.get("eli5") if isinstance(data, dict) else None
        return eli5.strip() if isinstance(eli5, str) else ""
