"""Decoding of the objects cut out of a streamed model response."""
import json
import logging
from typing import Any, Optional
from budgetai.errors import StructuralMismatchError

logger = logging.getLogger(__name__)

DATA_PARSING_ERROR = "[Data parsing error]"


def api_error_notice(message: Any) -> str:
    return f"[API Error: {message}]"


def _step(node: Any, key, path: str, payload: Any) -> Any:
    if isinstance(key, int):
        if not isinstance(node, list) or len(node) <= key:
            raise StructuralMismatchError(payload, path)
        return node[key]
    if not isinstance(node, dict) or key not in node:
        raise StructuralMismatchError(payload, path)
    return node[key]


def extract_text(payload: Any) -> Optional[str]:
    """
    Read ``candidates[0].content.parts[0].text`` from a decoded chunk.

    Raises:
        StructuralMismatchError: if any level of the path is missing
    """
    node = payload
    path = ""
    for key in ("candidates", 0, "content", "parts", 0, "text"):
        path = f"{path}[{key}]" if isinstance(key, int) else (f"{path}.{key}" if path else key)
        node = _step(node, key, path, payload)
    if node is None:
        return None
    return node if isinstance(node, str) else str(node)


def parse_candidate(candidate: str) -> Optional[str]:
    """
    Turn one streamed object into the fragment to show the user.

    Returns the model text, a bracketed notice for upstream errors and
    undecodable chunks, or None when the chunk carries no text.

    Raises:
        StructuralMismatchError: if the chunk is valid JSON of an unknown shape
    """
    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error("JSON parsing error: %s", e, extra={"chunk_length": len(candidate)})
        return DATA_PARSING_ERROR

    if isinstance(payload, dict) and "error" in payload:
        error = payload["error"]
        if not isinstance(error, dict) or "message" not in error:
            raise StructuralMismatchError(payload, "error.message")
        logger.error("Gemini API error: %s", error["message"])
        return api_error_notice(error["message"])

    text = extract_text(payload)
    return text or None
