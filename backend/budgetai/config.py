"""Configuration settings for the application."""
from typing import Tuple
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_FINANCIAL_KEYWORDS: Tuple[str, ...] = (
    "budget", "spending", "expense", "income", "savings",
    "transaction", "category", "cashflow", "financial",
    "money", "cost", "price", "amount", "balance", "account",
)

# Labels the upstream model sometimes injects around its JSON answer
DEFAULT_CLEANUP_TOKENS: Tuple[str, ...] = ("Document:", "01.json")


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=(),
    )

    app_name: str = "Budget AI API"
    debug: bool = False
    log_level: str = "INFO"

    # Upstream generative model
    ai_model: str = "gemini-1.5-flash"
    gemini_api_key: str = ""
    gemini_endpoint: str = (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent"
    )
    gemini_stream_endpoint: str = (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:streamGenerateContent"
    )
    request_timeout: float = 60.0
    stream_read_size: int = 1024

    # Generation config sent with every prompt
    temperature: float = 0.4
    top_p: float = 1
    top_k: int = 32
    max_output_tokens: int = 2048

    financial_keywords: Tuple[str, ...] = DEFAULT_FINANCIAL_KEYWORDS
    cleanup_tokens: Tuple[str, ...] = DEFAULT_CLEANUP_TOKENS


settings = Settings()
