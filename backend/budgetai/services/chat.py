"""Streaming chat over the user's finances."""
import logging
from typing import AsyncIterator, List, Optional, Sequence
from budgetai.adapters.base import TextSource
from budgetai.config import settings
from budgetai.errors import UpstreamRequestError
from budgetai.models.transaction import Budget, Transaction
from budgetai.parsing.scanner import BraceScanner
from budgetai.parsing.stream import parse_candidate
from budgetai.services.prompts import PromptBuilder

logger = logging.getLogger(__name__)

EMPTY_PROMPT_NOTICE = "[Error: Prompt cannot be empty]"

OFF_TOPIC_GUIDANCE = (
    "I can only assist with financial and budgeting-related questions. "
    "Please ask me about your transactions, budgets, spending patterns, or financial analysis."
)

NOT_CONFIGURED_NOTICE = "[Error: AI service is not configured]"


def transport_error_notice(error: UpstreamRequestError) -> str:
    status = error.status_code if error.status_code is not None else "connection error"
    return f"[Error: API request failed ({status})]"


class ChatService:
    """Answers finance questions as a stream of text fragments."""

    def __init__(
        self,
        source: Optional[TextSource],
        keywords: Optional[Sequence[str]] = None,
        prompt_builder: Optional[PromptBuilder] = None,
    ):
        self.source = source
        self.keywords = tuple(k.lower() for k in (keywords if keywords is not None else settings.financial_keywords))
        self.prompt_builder = prompt_builder or PromptBuilder()

    def detect_keywords(self, prompt: str) -> List[str]:
        """Financial keywords contained in ``prompt``, case-insensitively."""
        lowered = prompt.lower()
        return [k for k in self.keywords if k in lowered]

    async def stream_message(
        self,
        prompt: str,
        transactions: List[Transaction],
        budgets: List[Budget],
    ) -> AsyncIterator[str]:
        """
        Ask the model ``prompt`` and yield its answer as it streams in.

        Input rejections, upstream errors and undecodable chunks are yielded
        as bracketed notices. Nothing is sent upstream when the prompt is
        rejected.

        Raises:
            StructuralMismatchError: if a chunk decodes to an unexpected shape
        """
        if not prompt or not prompt.strip():
            yield EMPTY_PROMPT_NOTICE
            return

        if not self.detect_keywords(prompt):
            logger.info("Rejected off-topic prompt", extra={"prompt_length": len(prompt)})
            yield OFF_TOPIC_GUIDANCE
            return

        if self.source is None:
            yield NOT_CONFIGURED_NOTICE
            return

        full_prompt = self.prompt_builder.build_chat_prompt(prompt, transactions, budgets)
        logger.info("Sending prompt to Gemini AI: %s", full_prompt)
        payload = self.prompt_builder.build_payload(full_prompt)

        scanner = BraceScanner()
        stream = self.source.open_stream(payload)
        try:
            async for chunk in stream:
                for candidate in scanner.feed(chunk):
                    fragment = parse_candidate(candidate)
                    if fragment:
                        yield fragment
        except UpstreamRequestError as e:
            yield transport_error_notice(e)
            return
        finally:
            # Closes the upstream response; a partial object left in the scanner is dropped
            await stream.aclose()
            if scanner.pending:
                logger.warning("Discarded unterminated chunk at end of stream")
