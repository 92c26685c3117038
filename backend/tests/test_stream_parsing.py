"""Tests for decoding streamed response objects."""
import json
import pytest
from budgetai.errors import StructuralMismatchError
from budgetai.parsing.stream import DATA_PARSING_ERROR, parse_candidate


def _chunk(text):
    return json.dumps({"candidates": [{"content": {"parts": [{"text": text}]}}]})


def test_text_is_extracted():
    assert parse_candidate(_chunk("Hello")) == "Hello"


def test_empty_text_yields_nothing():
    assert parse_candidate(_chunk("")) is None
    assert parse_candidate(_chunk(None)) is None


def test_api_error_becomes_notice():
    assert parse_candidate('{"error":{"message":"rate limited"}}') == "[API Error: rate limited]"


def test_undecodable_chunk_becomes_notice():
    assert parse_candidate('{"candidates": [oops]}') == DATA_PARSING_ERROR


@pytest.mark.parametrize(
    "payload,missing",
    [
        ({"usageMetadata": {}}, "candidates"),
        ({"candidates": []}, "candidates[0]"),
        ({"candidates": [{}]}, "candidates[0].content"),
        ({"candidates": [{"content": {"parts": []}}]}, "candidates[0].content.parts[0]"),
        ({"candidates": [{"content": {"parts": [{}]}}]}, "candidates[0].content.parts[0].text"),
    ],
)
def test_missing_path_is_structural_mismatch(payload, missing):
    with pytest.raises(StructuralMismatchError) as exc_info:
        parse_candidate(json.dumps(payload))
    assert exc_info.value.missing == missing


def test_error_without_message_is_structural_mismatch():
    with pytest.raises(StructuralMismatchError):
        parse_candidate('{"error": {"code": 429}}')
