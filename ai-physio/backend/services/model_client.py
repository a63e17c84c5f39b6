"""
Streaming client for OpenAI-compatible chat completions providers.

The provider answers with a line-oriented event stream:

    data: {"choices": [{"delta": {"content": "Hel"}}]}
    data: {"choices": [{"delta": {"content": "lo"}}]}
    data: [DONE]

`stream_chat` yields each non-empty ``delta.content`` in order and stops at ``[DONE]``
or when the provider closes the connection. Closing the generator early closes the
upstream connection.
"""

from __future__ import annotations

import codecs
import json
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import httpx
from loguru import logger

from core.config import Settings
from core.errors import ModelAPIError, ModelConfigError

DATA_PREFIX = "data:"
DONE_TOKEN = "[DONE]"
DONE: Any = object()


@dataclass(frozen=True)
class ModelEndpoint:
    base_url: str
    api_key: str
    model: str
    timeout_seconds: float = 60.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelEndpoint":
        missing = [
            name
            for name, value in (
                ("MODEL_BASE_URL", settings.model_base_url),
                ("MODEL_API_KEY", settings.model_api_key),
                ("MODEL_NAME", settings.model_name),
            )
            if not value
        ]
        if missing:
            raise ModelConfigError(f"Model provider is not configured; missing {', '.join(missing)}")
        return cls(
            base_url=str(settings.model_base_url).rstrip("/"),
            api_key=str(settings.model_api_key),
            model=str(settings.model_name),
            timeout_seconds=settings.model_timeout_seconds,
        )


class SSELineBuffer:
    """
    Turns arbitrary byte chunks into complete text lines.

    Network reads can split a line, or a multi-byte UTF-8 character, anywhere; the
    incomplete tail is carried over to the next feed().
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def feed(self, chunk: bytes) -> list[str]:
        self._buffer += self._decoder.decode(chunk)
        *lines, self._buffer = self._buffer.split("\n")
        return lines

    def flush(self) -> list[str]:
        tail = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        return [tail] if tail.strip() else []


def parse_sse_data(line: str) -> Any:
    """Delta text for one line, DONE for the terminator, or None for anything to skip."""
    trimmed = line.strip()
    if not trimmed.startswith(DATA_PREFIX):
        return None
    payload = trimmed[len(DATA_PREFIX) :].strip()
    if payload == DONE_TOKEN:
        return DONE

    try:
        event = json.loads(payload)
    except json.JSONDecodeError:
        # A framing hiccup drops one line, not the stream.
        return None

    try:
        delta = event["choices"][0]["delta"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return delta if isinstance(delta, str) and delta else None


def stream_chat(
    endpoint: ModelEndpoint,
    messages: list[dict[str, str]],
    *,
    transport: httpx.BaseTransport | None = None,
) -> Iterator[str]:
    payload = {"model": endpoint.model, "messages": messages, "stream": True}
    headers = {
        "Authorization": f"Bearer {endpoint.api_key}",
        "Content-Type": "application/json",
    }
    url = f"{endpoint.base_url}/chat/completions"

    with httpx.Client(timeout=httpx.Timeout(endpoint.timeout_seconds, connect=10.0), transport=transport) as client:
        with client.stream("POST", url, headers=headers, json=payload) as response:
            if not response.is_success:
                body = response.read().decode("utf-8", errors="replace").strip()
                logger.error(f"Model API returned {response.status_code}: {body[:500]}")
                raise ModelAPIError(response.status_code, body)

            buffer = SSELineBuffer()
            received = False
            for chunk in response.iter_bytes():
                if not chunk:
                    continue
                received = True
                for line in buffer.feed(chunk):
                    delta = parse_sse_data(line)
                    if delta is DONE:
                        return
                    if delta:
                        yield delta

            if not received:
                raise ModelAPIError(response.status_code, "empty response body")

            for line in buffer.flush():
                delta = parse_sse_data(line)
                if delta is DONE:
                    return
                if delta:
                    yield delta
