"""Deterministic Claude fixtures for offline client tests."""

from __future__ import annotations

import asyncio
import json
import time
from typing import Any, AsyncIterator, Callable, Iterable, Sequence

import httpx
from azure.core.credentials import AccessToken

ENDPOINT = "https://example.services.ai.azure.com/anthropic/v1/messages"
MODEL_ID = "claude-sonnet-4-5"


class FakeTokenCredential:
    """Async credential returning a fixed token and recording requested scopes."""

    def __init__(self, token: str = "token-123", *, error: Exception | None = None) -> None:
        self._token = token
        self._error = error
        self.scopes: list[tuple[str, ...]] = []
        self.closed = False

    async def get_token(self, *scopes: str, **kwargs: Any) -> AccessToken:
        self.scopes.append(scopes)
        await asyncio.sleep(0)
        if self._error is not None:
            raise self._error
        return AccessToken(self._token, 4_102_444_800)

    async def close(self) -> None:
        self.closed = True


class SyncTokenCredential:
    """Blocking credential mirroring ``azure.identity.DefaultAzureCredential``."""

    def __init__(self, token: str = "sync-token", *, delay: float = 0.0) -> None:
        self._token = token
        self._delay = delay
        self.scopes: list[tuple[str, ...]] = []

    def get_token(self, *scopes: str, **kwargs: Any) -> AccessToken:
        self.scopes.append(scopes)
        if self._delay:
            time.sleep(self._delay)
        return AccessToken(self._token, 4_102_444_800)


class RecordingHandler:
    """``httpx.MockTransport`` handler that records requests."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self._respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def payloads(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


def build_http_client(
    respond: Callable[[httpx.Request], httpx.Response],
) -> tuple[httpx.AsyncClient, RecordingHandler]:
    """Return an ``httpx.AsyncClient`` backed by a recording mock transport."""

    handler = RecordingHandler(respond)
    return httpx.AsyncClient(transport=httpx.MockTransport(handler)), handler


def json_response(payload: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def _respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return _respond


def sse_response(lines: Sequence[str], status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    body = "".join(f"{line}\n" for line in lines).encode("utf-8")

    def _respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code,
            content=body,
            headers={"Content-Type": "text/event-stream"},
        )

    return _respond


def message_response(
    text: str = "hi",
    *,
    stop_reason: str | None = "end_turn",
    input_tokens: int = 10,
    output_tokens: int = 5,
) -> dict[str, Any]:
    """A buffered Messages API body with a single text block."""

    return {
        "id": "msg_01",
        "type": "message",
        "role": "assistant",
        "model": MODEL_ID,
        "stop_reason": stop_reason,
        "stop_sequence": None,
        "content": [{"type": "text", "text": text}],
        "usage": {"input_tokens": input_tokens, "output_tokens": output_tokens},
    }


def data_line(event: dict[str, Any]) -> str:
    return "data: " + json.dumps(event)


def text_delta(text: str) -> str:
    return data_line({"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": text}})


def hello_stream_lines() -> list[str]:
    """A full Claude event sequence spelling ``Hello``."""

    return [
        "event: message_start",
        data_line({"type": "message_start", "message": {"id": "msg_01", "model": MODEL_ID}}),
        "",
        "event: content_block_start",
        data_line({"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}}),
        "",
        ": keep-alive",
        text_delta("He"),
        "",
        text_delta("llo"),
        "",
        data_line({"type": "content_block_stop", "index": 0}),
        data_line({"type": "message_delta", "delta": {"stop_reason": "end_turn"}, "usage": {"output_tokens": 2}}),
        data_line({"type": "message_stop"}),
        "",
        "data: [DONE]",
    ]


class FakeLineResponse:
    """Stand-in for an open streaming ``httpx.Response``.

    Tracks how many lines were pulled and whether it was closed. With
    ``hang=True`` the line iterator blocks after the given lines until the
    response is closed.
    """

    def __init__(self, lines: Iterable[str], *, hang: bool = False) -> None:
        self._lines = list(lines)
        self._hang = hang
        self._released = asyncio.Event()
        self.consumed = 0
        self.closed = False

    async def aiter_lines(self) -> AsyncIterator[str]:
        for line in self._lines:
            self.consumed += 1
            yield line
        if self._hang:
            await self._released.wait()

    async def aclose(self) -> None:
        self.closed = True
        self._released.set()


def opener_for(response: Any) -> Callable[[], Any]:
    async def _open() -> Any:
        return response

    return _open


__all__ = [
    "ENDPOINT",
    "FakeLineResponse",
    "FakeTokenCredential",
    "MODEL_ID",
    "RecordingHandler",
    "SyncTokenCredential",
    "build_http_client",
    "data_line",
    "hello_stream_lines",
    "json_response",
    "message_response",
    "opener_for",
    "sse_response",
    "text_delta",
]
