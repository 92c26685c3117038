"""Transaction and budget data models."""
from datetime import datetime
from typing import List
from pydantic import BaseModel, Field


class Transaction(BaseModel):
    """Transaction model."""

    transaction_date: datetime
    payee: str = Field(default="", description="Merchant or counterparty")
    amount: float = Field(..., description="Negative for spending, positive for income")
    categories: List[str] = Field(default_factory=list, description="Transaction categories, most specific first")

    model_config = {
        "json_schema_extra": {
            "example": {
                "transaction_date": "2024-01-15T10:30:00Z",
                "payee": "STARBUCKS #1234",
                "amount": -45.99,
                "categories": ["Food & Dining"],
            }
        }
    }

    @property
    def primary_category(self) -> str:
        return self.categories[0] if self.categories else "Uncategorized"

    @property
    def is_expense(self) -> bool:
        return self.amount < 0


class Budget(BaseModel):
    """Budget for one category."""

    category: str
    total_amount: float = Field(..., ge=0, description="Budgeted amount")
    spend_amount: float = Field(default=0.0, description="Amount spent so far")

    @property
    def remaining(self) -> float:
        return self.total_amount - self.spend_amount
