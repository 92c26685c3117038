"""Google Gemini REST transport."""
import logging
from typing import Any, AsyncGenerator, Dict, Optional
import httpx
from budgetai.adapters.base import TextSource
from budgetai.config import settings
from budgetai.errors import UpstreamRequestError

logger = logging.getLogger(__name__)


class GeminiTextSource(TextSource):
    """Talks to the ``generateContent`` and ``streamGenerateContent`` endpoints over httpx."""

    def __init__(self, model_id: str = "gemini-1.5-flash", **kwargs):
        super().__init__(model_id, **kwargs)
        self.api_key = kwargs.get("api_key") or settings.gemini_api_key
        if not self.api_key:
            raise ValueError("Gemini API key required. Set GEMINI_API_KEY in .env")
        self.endpoint = kwargs.get("endpoint") or settings.gemini_endpoint
        self.stream_endpoint = kwargs.get("stream_endpoint") or settings.gemini_stream_endpoint
        self.timeout = kwargs.get("timeout") or settings.request_timeout
        self.read_size = kwargs.get("read_size") or settings.stream_read_size
        # Optional transport override, used by tests
        self.transport: Optional[httpx.AsyncBaseTransport] = kwargs.get("transport")

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            headers={"Accept": "application/json"},
        )

    async def open_stream(self, payload: Dict[str, Any]) -> AsyncGenerator[str, None]:
        """Stream the response body in chunks of at most ``read_size`` characters."""
        try:
            async with self._client() as client:
                async with client.stream(
                    "POST", self.stream_endpoint, params={"key": self.api_key}, json=payload
                ) as response:
                    if not response.is_success:
                        body = (await response.aread()).decode("utf-8", errors="replace")
                        logger.error("API request failed: %s - %s", response.status_code, body)
                        raise UpstreamRequestError(response.status_code, body)
                    async for text in response.aiter_text(self.read_size):
                        yield text
        except httpx.RequestError as e:
            logger.error("Gemini stream connection failed: %s", e)
            raise UpstreamRequestError(None, str(e)) from e

    async def fetch_once(self, payload: Dict[str, Any]) -> str:
        try:
            async with self._client() as client:
                response = await client.post(self.endpoint, params={"key": self.api_key}, json=payload)
        except httpx.RequestError as e:
            logger.error("Gemini request failed: %s", e)
            raise UpstreamRequestError(None, str(e)) from e

        if not response.is_success:
            logger.error("API request failed: %s - %s", response.status_code, response.text)
            raise UpstreamRequestError(response.status_code, response.text)
        return response.text
