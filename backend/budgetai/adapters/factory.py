"""Factory for creating upstream text sources."""
from budgetai.adapters.base import TextSource
from budgetai.adapters.mock import MockTextSource
from budgetai.adapters.gemini_adapter import GeminiTextSource


def get_text_source(model_id: str, **kwargs) -> TextSource:
    """
    Factory function to create the text source for ``model_id``.

    Args:
        model_id: Model identifier (e.g., "mock:gemini", "gemini-1.5-flash")
        **kwargs: Additional configuration for the source

    Returns:
        TextSource instance
    """
    if model_id.startswith("mock:"):
        return MockTextSource(model_id, **kwargs)
    return GeminiTextSource(model_id, **kwargs)
