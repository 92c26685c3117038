"""Extraction of the analysis object from a fully buffered model response."""
import json
import logging
import re
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple
from budgetai.config import DEFAULT_CLEANUP_TOKENS
from budgetai.errors import (
    AnalysisDecodeError,
    EmptyModelResponseError,
    IncompleteJsonObjectError,
    NoJsonObjectError,
    UpstreamError,
)
from budgetai.models.analysis import ANALYSIS_FIELDS, AnalysisRecord, FieldSpec

logger = logging.getLogger(__name__)


def extract_first_object(text: str) -> str:
    """
    Return the first balanced ``{...}`` substring of ``text``.

    Raises:
        NoJsonObjectError: if there is no ``{`` at all
        IncompleteJsonObjectError: if the first object never closes
    """
    start = text.find("{")
    if start == -1:
        raise NoJsonObjectError()

    stack = []
    for i in range(start, len(text)):
        char = text[i]
        if char == "{":
            stack.append(i)
        elif char == "}" and stack:
            stack.pop()
            if not stack:
                return text[start:i + 1]
    raise IncompleteJsonObjectError()


def clean_candidate(candidate: str, tokens: Iterable[str] = DEFAULT_CLEANUP_TOKENS) -> str:
    """Strip fences, line breaks, doubled quote escapes and injected labels."""
    cleaned = (
        candidate
        .replace("```json", "")
        .replace("```", "")
        .replace("\n", " ")
        .replace("\r", " ")
        .replace('\\"', '"')
    )
    for token in tokens:
        cleaned = cleaned.replace(token, "")
    return cleaned.strip()


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list) and all(not isinstance(v, (dict, list)) for v in value):
        return "\n".join(str(v).strip() for v in value if v is not None).strip()
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value).strip()


_JSON_ESCAPE = re.compile(r"\\(.)")
_UNICODE_ESCAPES = {'"': "\\u0022", "\\": "\\u005c"}


def _unicode_escape(match: "re.Match[str]") -> str:
    return _UNICODE_ESCAPES.get(match.group(1), match.group(0))


def _dumps_cleanup_safe(normalized: Mapping[str, str]) -> str:
    """
    Serialise a flat string mapping so it reads back unchanged through
    ``extract_first_object`` and ``clean_candidate``.

    Quotes, backslashes and braces inside values are written as ``\\u``
    escapes, so the cleanup pass never sees ``\\"`` and the only raw braces
    are the outer ones.
    """
    dumped = json.dumps(normalized, ensure_ascii=False)
    dumped = _JSON_ESCAPE.sub(_unicode_escape, dumped)
    inner = dumped[1:-1].replace("{", "\\u007b").replace("}", "\\u007d")
    return "{" + inner + "}"


def get_flexible_property(data: Mapping[str, Any], aliases: Sequence[str]) -> str:
    """First present alias wins; a missing field reads as an empty string."""
    for name in aliases:
        if name in data:
            return _as_text(data[name])
    return ""


def extract_candidate_text(body: str) -> str:
    """
    Pull the model text out of a ``generateContent`` response envelope.

    Raises:
        AnalysisDecodeError: if the envelope is not JSON
        UpstreamError: if the envelope is an ``error`` payload
        EmptyModelResponseError: if there is no candidate text
    """
    try:
        envelope = json.loads(body)
    except json.JSONDecodeError as e:
        raise AnalysisDecodeError(body, str(e)) from e

    if isinstance(envelope, dict) and isinstance(envelope.get("error"), dict):
        raise UpstreamError(str(envelope["error"].get("message", "")))

    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        text = None
    if not text or not isinstance(text, str):
        raise EmptyModelResponseError()
    return text


class AnalysisExtractor:
    """
    Turns raw model text into an AnalysisRecord.

    Missing or oddly named fields never fail the extraction; they fall back
    to the field's default sentence so callers always get a full record.
    """

    def __init__(
        self,
        fields: Tuple[FieldSpec, ...] = ANALYSIS_FIELDS,
        cleanup_tokens: Tuple[str, ...] = DEFAULT_CLEANUP_TOKENS,
    ):
        self.fields = fields
        self.cleanup_tokens = cleanup_tokens

    def normalize(self, data: Mapping[str, Any]) -> Dict[str, str]:
        """Map aliased keys onto primary keys, flattening every value to text."""
        return {spec.key: get_flexible_property(data, spec.aliases) for spec in self.fields}

    def build_record(self, normalized: Mapping[str, Any]) -> AnalysisRecord:
        values = {}
        for spec in self.fields:
            value = get_flexible_property(normalized, spec.aliases)
            values[spec.attribute] = value or spec.default
        return AnalysisRecord(**values)

    def to_normalized_json(self, text: str) -> str:
        """
        Extract, clean and decode the first object in ``text`` and re-serialise
        it with primary keys and plain string values only.

        Raises:
            NoJsonObjectError, IncompleteJsonObjectError, AnalysisDecodeError
        """
        candidate = extract_first_object(text)
        cleaned = clean_candidate(candidate, self.cleanup_tokens)
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise AnalysisDecodeError(text, str(e)) from e

        normalized = _dumps_cleanup_safe(self.normalize(data))
        logger.debug("Cleaned JSON string: %s", normalized)
        return normalized

    def extract(self, text: str) -> AnalysisRecord:
        normalized = self.to_normalized_json(text)
        return self.build_record(json.loads(normalized))
