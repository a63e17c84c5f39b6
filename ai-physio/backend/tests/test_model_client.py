import json

import httpx
import pytest

from core.config import Settings
from core.errors import ModelAPIError, ModelConfigError
from services.model_client import DONE, ModelEndpoint, SSELineBuffer, parse_sse_data, stream_chat

ENDPOINT = ModelEndpoint(base_url="https://llm.test/v1", api_key="sk-test", model="test-model")


def _event(content: str) -> bytes:
    return f"data: {json.dumps({'choices': [{'delta': {'content': content}}]})}\n\n".encode()


def _transport(status_code: int = 200, chunks=None, text: str | None = None, seen: list | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, content=iter(chunks or []))

    return httpx.MockTransport(handler)


def test_line_buffer_carries_partial_lines():
    buf = SSELineBuffer()
    assert buf.feed(b"data: one\nda") == ["data: one"]
    assert buf.feed(b"ta: two") == []
    assert buf.feed(b"\n") == ["data: two"]
    assert buf.flush() == []


def test_line_buffer_handles_split_multibyte_character():
    raw = "data: café\n".encode()
    split_at = raw.index(b"\xc3") + 1
    buf = SSELineBuffer()
    assert buf.feed(raw[:split_at]) == []
    assert buf.feed(raw[split_at:]) == ["data: café"]


def test_line_buffer_flush_returns_unterminated_tail():
    buf = SSELineBuffer()
    buf.feed(b"data: [DONE]")
    assert buf.flush() == ["data: [DONE]"]


def test_parse_sse_data():
    assert parse_sse_data('data: {"choices":[{"delta":{"content":"Hi"}}]}') == "Hi"
    assert parse_sse_data("data: [DONE]") is DONE
    assert parse_sse_data("data: {broken") is None
    assert parse_sse_data('data: {"choices":[{"delta":{}}]}') is None
    assert parse_sse_data('data: {"choices":[{"delta":{"content":""}}]}') is None
    assert parse_sse_data('data: {"choices":[]}') is None
    assert parse_sse_data(": keep-alive") is None
    assert parse_sse_data("") is None


def test_stream_chat_relays_deltas_in_order_and_stops_at_done():
    seen: list[httpx.Request] = []
    chunks = [
        _event("Start ") + b'data: {"choices":[{"delta":{"content":"with',
        b' "}}]}\n\ndata: {not json}\n\n',
        _event("scaption."),
        b"data: [DONE]\n\n",
        _event("never emitted"),
    ]
    messages = [{"role": "user", "content": "hello"}]

    out = list(stream_chat(ENDPOINT, messages, transport=_transport(chunks=chunks, seen=seen)))

    assert "".join(out) == "Start with scaption."
    assert out == ["Start ", "with ", "scaption."]

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://llm.test/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert json.loads(request.content) == {"model": "test-model", "messages": messages, "stream": True}


def test_stream_chat_ends_when_upstream_closes_without_done():
    out = list(stream_chat(ENDPOINT, [], transport=_transport(chunks=[_event("a"), _event("b")])))
    assert out == ["a", "b"]


def test_stream_chat_raises_on_error_status():
    with pytest.raises(ModelAPIError) as info:
        list(stream_chat(ENDPOINT, [], transport=_transport(status_code=401, text="invalid api key")))
    assert info.value.status_code == 401
    assert "invalid api key" in str(info.value)


def test_stream_chat_raises_on_empty_body():
    with pytest.raises(ModelAPIError, match="empty response body"):
        list(stream_chat(ENDPOINT, [], transport=_transport(chunks=[])))


def test_endpoint_from_settings_requires_all_three_values():
    with pytest.raises(ModelConfigError, match="MODEL_API_KEY"):
        ModelEndpoint.from_settings(Settings(model_base_url="https://llm.test/v1", model_api_key=None, model_name="m"))


def test_endpoint_from_settings_strips_trailing_slash():
    endpoint = ModelEndpoint.from_settings(
        Settings(model_base_url="https://llm.test/v1/", model_api_key="k", model_name="m", model_timeout_seconds=5)
    )
    assert endpoint == ModelEndpoint(base_url="https://llm.test/v1", api_key="k", model="m", timeout_seconds=5)
