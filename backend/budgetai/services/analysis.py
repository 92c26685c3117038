"""Quarterly spending analysis."""
import logging
from datetime import datetime
from typing import List, Optional
from budgetai.adapters.base import TextSource
from budgetai.config import settings
from budgetai.models.analysis import AnalysisRecord
from budgetai.models.transaction import Transaction
from budgetai.parsing.batch import AnalysisExtractor, extract_candidate_text
from budgetai.services.prompts import PromptBuilder

logger = logging.getLogger(__name__)


class AnalysisService:
    """Service for generating the three-month analysis record."""

    def __init__(
        self,
        source: TextSource,
        extractor: Optional[AnalysisExtractor] = None,
        prompt_builder: Optional[PromptBuilder] = None,
    ):
        self.source = source
        self.extractor = extractor or AnalysisExtractor(cleanup_tokens=settings.cleanup_tokens)
        self.prompt_builder = prompt_builder or PromptBuilder()

    async def analyze_last_three_months(
        self,
        transactions: List[Transaction],
        as_of: Optional[datetime] = None,
    ) -> AnalysisRecord:
        """
        Analyse the given transactions with the model.

        The call is idempotent for a given model response, so callers may
        retry it as a whole.

        Args:
            transactions: Transactions from the last three months
            as_of: End of the analysed period. Defaults to now (UTC)

        Returns:
            AnalysisRecord with every field filled, defaulted where the model was silent

        Raises:
            ValueError: if there are no transactions
            IngestionError: on transport, envelope or decode failures
        """
        if not transactions:
            raise ValueError("No transactions to analyse")

        prompt = self.prompt_builder.build_quarterly_analysis_prompt(transactions, as_of)
        payload = self.prompt_builder.build_payload(prompt)
        body = await self.source.fetch_once(payload)

        text = extract_candidate_text(body)
        logger.info("Raw LLM response received", extra={"response_length": len(text)})
        logger.debug("Raw LLM response: %s", text)

        return self.extractor.extract(text)
