"""Request models for the AI endpoints."""
from typing import List
from pydantic import BaseModel, Field
from budgetai.models.transaction import Transaction, Budget


class ChatRequest(BaseModel):
    """Question about the user's finances, with the data to answer it from."""

    prompt: str = Field(default="", description="User question")
    transactions: List[Transaction] = Field(default_factory=list)
    budgets: List[Budget] = Field(default_factory=list)


class AnalysisRequest(BaseModel):
    """Transactions to analyse, normally the last three months."""

    transactions: List[Transaction] = Field(default_factory=list)
