"""Errors raised while ingesting responses from the upstream model."""
from typing import Any, Optional


class IngestionError(Exception):
    """Base class for every failure in the response ingestion pipeline."""


class UpstreamRequestError(IngestionError):
    """The upstream endpoint could not be reached or answered with a non-success status."""

    def __init__(self, status_code: Optional[int], body: str = ""):
        self.status_code = status_code
        self.body = body
        if status_code is None:
            super().__init__(f"Upstream request failed: {body}")
        else:
            super().__init__(f"Upstream request failed ({status_code}): {body}")


class UpstreamError(IngestionError):
    """The upstream model answered with an ``error.message`` payload."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"API Error: {message}")


class StructuralMismatchError(IngestionError):
    """A chunk decoded as JSON but lacks the ``candidates[0].content.parts[0].text`` path."""

    def __init__(self, payload: Any, missing: str):
        self.payload = payload
        self.missing = missing
        super().__init__(f"Unexpected response structure: missing {missing}")


class NoJsonObjectError(IngestionError):
    """No opening brace anywhere in the response."""

    def __init__(self):
        super().__init__("No JSON object found in response")


class IncompleteJsonObjectError(IngestionError):
    """An opening brace was found but never balanced."""

    def __init__(self):
        super().__init__("No complete JSON object found in response")


class EmptyModelResponseError(IngestionError):
    """The response envelope held no candidate text."""

    def __init__(self):
        super().__init__("Empty response received from LLM")


class AnalysisDecodeError(IngestionError):
    """The extracted analysis object is not valid JSON.

    The raw upstream response is kept on the exception and in its message,
    since every payload is different and the failure cannot be reproduced
    without it.
    """

    def __init__(self, raw_content: str, reason: str = ""):
        self.raw_content = raw_content
        self.reason = reason
        message = f"Failed to parse JSON. Response content: {raw_content}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
