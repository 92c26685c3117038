from .base import TextSource
from .mock import MockTextSource
from .gemini_adapter import GeminiTextSource
from .factory import get_text_source

__all__ = [
    "TextSource",
    "MockTextSource",
    "GeminiTextSource",
    "get_text_source",
]
