"""Tests for the brace-balance scanner."""
import pytest
from budgetai.parsing.scanner import BraceScanner, scan_objects


def test_single_object_in_prose():
    """Prose and fences around an object are dropped."""
    text = 'Sure! ```json\n{"a": {"b": 1}}\n``` hope that helps'
    assert scan_objects(text) == ['{"a": {"b": 1}}']


def test_no_opening_brace_emits_nothing():
    assert scan_objects("plain text ] with } closers ,") == []


def test_multiple_objects_in_array():
    """Array punctuation between streamed elements is ignored."""
    text = '[{"x": 1},\r\n{"y": {"z": 2}}]'
    assert scan_objects(text) == ['{"x": 1}', '{"y": {"z": 2}}']


@pytest.mark.parametrize("size", [1, 2, 3, 7, 64])
def test_chunk_boundaries_do_not_change_output(size):
    text = 'noise {"a": [1, {"b": 2}]} more {"c": "d"} tail {"e"'
    chunks = [text[i:i + size] for i in range(0, len(text), size)]
    assert scan_objects(chunks) == scan_objects(text)
    assert scan_objects(chunks) == ['{"a": [1, {"b": 2}]}', '{"c": "d"}']


def test_stray_closers_before_opener_are_ignored():
    assert scan_objects('}} }{"ok": true}') == ['{"ok": true}']


def test_partial_object_is_held_not_emitted():
    scanner = BraceScanner()
    assert scanner.feed('{"text": "half') == []
    assert scanner.pending is True
    assert scanner.feed('way"}') == ['{"text": "halfway"}']
    assert scanner.pending is False


def test_reset_discards_partial_object():
    scanner = BraceScanner()
    scanner.feed('{"a": 1')
    scanner.reset()
    assert scanner.pending is False
    assert scanner.feed('{"b": 2}') == ['{"b": 2}']


def test_braces_inside_strings_are_counted():
    """No string awareness: a lone brace in a value keeps the object open."""
    scanner = BraceScanner()
    assert scanner.feed('{"text": "{"}') == []
    assert scanner.pending is True
