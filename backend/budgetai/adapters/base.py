"""Base upstream text source interface."""
from abc import ABC, abstractmethod
from typing import Any, AsyncGenerator, Dict


class TextSource(ABC):
    """Abstract base class for generative-model transports."""

    def __init__(self, model_id: str, **kwargs):
        """
        Initialize the source.

        Args:
            model_id: Identifier for the model (e.g., "gemini-1.5-flash", "mock:gemini")
            **kwargs: Additional provider-specific configuration
        """
        self.model_id = model_id
        self.config = kwargs

    @abstractmethod
    def open_stream(self, payload: Dict[str, Any]) -> AsyncGenerator[str, None]:
        """
        Send a prompt payload and yield the response body as it arrives.

        Args:
            payload: Request body built by ``PromptBuilder.build_payload``

        Yields:
            Raw text chunks in arrival order

        Raises:
            UpstreamRequestError: on connection failure or non-success status
        """

    @abstractmethod
    async def fetch_once(self, payload: Dict[str, Any]) -> str:
        """
        Send a prompt payload and return the whole response body.

        Raises:
            UpstreamRequestError: on connection failure or non-success status
        """
