"""Mock text source for testing without API calls."""
import json
from typing import Any, AsyncGenerator, Dict, List, Optional
from budgetai.adapters.base import TextSource


def candidate_chunk(text: str) -> Dict[str, Any]:
    """Wrap ``text`` the way a ``streamGenerateContent`` element does."""
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class MockTextSource(TextSource):
    """Replays canned response bodies and records every payload it was sent."""

    # Deterministic responses for offline runs
    DEFAULT_STREAM_TEXTS = [
        "Your spending this month is within budget. ",
        "Groceries used 82% of their allocation, ",
        "so keep an eye on the remaining balance.",
    ]

    DEFAULT_ANALYSIS = {
        "overview": "Spending was steady across the quarter with income covering expenses.",
        "spendingTrends": "Dining out rose in the final month while utilities stayed flat.",
        "categoryAnalysis": "Groceries and rent make up most of the expense total.",
        "anomaliesOrRedFlags": "One unusually large electronics purchase stands out.",
        "timeBasedInsights": "Most discretionary spending happens at weekends.",
        "recommendations": "Set a weekly dining budget and review subscriptions.",
        "riskAssessment": "Savings buffer is below one month of expenses.",
        "opportunities": "Switching utility provider could reduce fixed costs.",
        "futureProjections": "At the current rate savings grow slowly next quarter.",
        "comparisonAnalysis": "Dining spend is above typical household benchmarks.",
        "disclaimer": "This analysis is for informational purposes only and not financial advice",
    }

    def __init__(
        self,
        model_id: str = "mock:gemini",
        chunks: Optional[List[str]] = None,
        body: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(model_id, **kwargs)
        if chunks is None:
            stream_body = "[" + ",\r\n".join(
                json.dumps(candidate_chunk(t)) for t in self.DEFAULT_STREAM_TEXTS
            ) + "]"
            chunks = [stream_body[i:i + 64] for i in range(0, len(stream_body), 64)]
        if body is None:
            analysis_text = "```json\n" + json.dumps(self.DEFAULT_ANALYSIS, indent=2) + "\n```"
            body = json.dumps(candidate_chunk(analysis_text))
        self.chunks = chunks
        self.body = body
        self.payloads: List[Dict[str, Any]] = []

    @property
    def call_count(self) -> int:
        return len(self.payloads)

    async def open_stream(self, payload: Dict[str, Any]) -> AsyncGenerator[str, None]:
        self.payloads.append(payload)
        for chunk in self.chunks:
            yield chunk

    async def fetch_once(self, payload: Dict[str, Any]) -> str:
        self.payloads.append(payload)
        return self.body
