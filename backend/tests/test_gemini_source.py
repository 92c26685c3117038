"""Tests for the Gemini REST transport, using httpx.MockTransport."""
import json
import httpx
import pytest
from budgetai.adapters.factory import get_text_source
from budgetai.adapters.gemini_adapter import GeminiTextSource
from budgetai.adapters.mock import MockTextSource, candidate_chunk
from budgetai.errors import UpstreamRequestError

PAYLOAD = {"contents": [{"parts": [{"text": "What is my balance?"}], "role": "user"}]}


def _source(handler, **kwargs):
    return GeminiTextSource(
        "gemini-1.5-flash",
        api_key="test-key",
        endpoint="https://example.test/generate",
        stream_endpoint="https://example.test/stream",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_stream_yields_bounded_chunks():
    body = json.dumps([candidate_chunk("Hello"), candidate_chunk(" world")])
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, text=body)

    source = _source(handler, read_size=16)
    chunks = [c async for c in source.open_stream(PAYLOAD)]

    assert "".join(chunks) == body
    assert all(len(c) <= 16 for c in chunks)
    assert seen["url"] == "https://example.test/stream?key=test-key"
    assert seen["body"] == PAYLOAD


@pytest.mark.asyncio
async def test_stream_non_success_status():
    source = _source(lambda request: httpx.Response(429, text="Too many requests"))
    with pytest.raises(UpstreamRequestError) as exc_info:
        async for _ in source.open_stream(PAYLOAD):
            pass
    assert exc_info.value.status_code == 429
    assert exc_info.value.body == "Too many requests"


@pytest.mark.asyncio
async def test_connection_error_has_no_status():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    source = _source(handler)
    with pytest.raises(UpstreamRequestError) as exc_info:
        await source.fetch_once(PAYLOAD)
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_fetch_once_returns_body():
    body = json.dumps(candidate_chunk('{"overview": "ok"}'))

    def handler(request):
        assert request.url.path == "/generate"
        assert request.headers["accept"] == "application/json"
        return httpx.Response(200, text=body)

    assert await _source(handler).fetch_once(PAYLOAD) == body


@pytest.mark.asyncio
async def test_fetch_once_non_success_status():
    source = _source(lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(UpstreamRequestError) as exc_info:
        await source.fetch_once(PAYLOAD)
    assert exc_info.value.status_code == 500


def test_missing_api_key(monkeypatch):
    from budgetai.adapters import gemini_adapter

    monkeypatch.setattr(gemini_adapter.settings, "gemini_api_key", "")
    with pytest.raises(ValueError):
        GeminiTextSource("gemini-1.5-flash")


def test_factory_selects_source():
    assert isinstance(get_text_source("mock:gemini"), MockTextSource)
    assert isinstance(get_text_source("gemini-1.5-flash", api_key="k"), GeminiTextSource)
