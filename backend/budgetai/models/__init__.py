from .transaction import Transaction, Budget
from .analysis import AnalysisRecord, FieldSpec, ANALYSIS_FIELDS
from .chat import ChatRequest, AnalysisRequest

__all__ = [
    "Transaction",
    "Budget",
    "AnalysisRecord",
    "FieldSpec",
    "ANALYSIS_FIELDS",
    "ChatRequest",
    "AnalysisRequest",
]
