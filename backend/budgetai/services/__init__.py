from .prompts import PromptBuilder
from .chat import ChatService
from .analysis import AnalysisService

__all__ = [
    "PromptBuilder",
    "ChatService",
    "AnalysisService",
]
