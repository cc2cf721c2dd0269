"""Server-sent event decoding and the base streaming iterator."""

from __future__ import annotations

import abc
import asyncio
import inspect
import logging
from collections import deque
from enum import Enum
from typing import Any, AsyncIterator, Awaitable, Callable, Deque, List, Optional, Protocol

import httpx
from pydantic import ValidationError

from ..completion import FinishReason, StreamingUpdate
from ..errors import TransportError
from .wire import ClaudeStreamingEvent

LOGGER = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"

CONTENT_BLOCK_DELTA = "content_block_delta"
MESSAGE_STOP = "message_stop"


class StreamState(str, Enum):
    """Lifecycle of a streaming iterator."""

    AWAITING_LINE = "awaiting_line"
    HAS_EVENT = "has_event"
    DONE = "done"


class StreamNormalizer(Protocol):
    async def normalize_chunk(self, chunk: str) -> List[StreamingUpdate]:
        """Map one raw line into zero or more streaming updates."""


class BaseStreamIterator(AsyncIterator[StreamingUpdate], metaclass=abc.ABCMeta):
    """Shared async iterator driving provider-specific streaming decoders.

    Subclasses source raw lines by implementing :meth:`_get_next_chunk`, which
    raises :class:`StopAsyncIteration` once the provider stream is exhausted.
    Each line is handed to a :class:`StreamNormalizer`; resulting updates are
    delivered one at a time before the next line is read. The iterator is
    single pass: once it reaches :attr:`StreamState.DONE` it never yields
    again.
    """

    def __init__(self, normalizer: StreamNormalizer) -> None:
        self._normalizer = normalizer
        self._buffer: Deque[StreamingUpdate] = deque()
        self._state = StreamState.AWAITING_LINE
        self._close_lock = asyncio.Lock()

    @property
    def state(self) -> StreamState:
        return self._state

    def __aiter__(self) -> BaseStreamIterator:
        return self

    async def __anext__(self) -> StreamingUpdate:
        while True:
            if self._state is StreamState.DONE:
                raise StopAsyncIteration

            buffered = self._pop_buffered_update()
            if buffered is not None:
                return buffered

            chunk = await self._consume_chunk()
            updates = await self._normalizer.normalize_chunk(chunk)
            if updates:
                self._buffer.extend(updates)
                self._state = StreamState.HAS_EVENT

    async def close(self) -> None:
        """Release provider resources and prevent additional iteration."""

        async with self._close_lock:
            if self._state is StreamState.DONE:
                return

            self._state = StreamState.DONE
            self._buffer.clear()
            await self._on_close()

    async def aclose(self) -> None:
        await self.close()

    async def _consume_chunk(self) -> str:
        # Exhaustion, read failures and cancellation all release the stream.
        try:
            return await self._get_next_chunk()
        except BaseException:
            await self.close()
            raise

    def _pop_buffered_update(self) -> StreamingUpdate | None:
        if not self._buffer:
            self._state = StreamState.AWAITING_LINE
            return None
        return self._buffer.popleft()

    @abc.abstractmethod
    async def _get_next_chunk(self) -> str:
        """Retrieve the next raw line from the provider stream."""

    async def _on_close(self) -> None:
        """Allow subclasses to dispose provider resources when closing."""


def parse_event(data: str) -> Optional[ClaudeStreamingEvent]:
    """Decode one ``data:`` payload, returning ``None`` when it is not valid JSON."""

    try:
        return ClaudeStreamingEvent.model_validate_json(data)
    except ValidationError:
        LOGGER.debug("skipping undecodable stream event")
        return None


def event_to_update(event: ClaudeStreamingEvent) -> Optional[StreamingUpdate]:
    """Translate a decoded event into a generic update, if it carries one."""

    if event.type == CONTENT_BLOCK_DELTA and event.delta is not None and event.delta.text is not None:
        return StreamingUpdate(text=event.delta.text)
    if event.type == MESSAGE_STOP:
        return StreamingUpdate(finish_reason=FinishReason.STOP)
    return None


def is_done_line(line: str) -> bool:
    return line.startswith(DATA_PREFIX) and line[len(DATA_PREFIX):].strip() == DONE_SENTINEL


class ClaudeStreamNormalizer(StreamNormalizer):
    """Filter SSE lines and turn Claude events into streaming updates."""

    async def normalize_chunk(self, chunk: str) -> List[StreamingUpdate]:
        if not chunk.strip() or not chunk.startswith(DATA_PREFIX):
            return []

        event = parse_event(chunk[len(DATA_PREFIX):])
        if event is None:
            return []

        update = event_to_update(event)
        if update is None:
            return []
        return [update]


ResponseOpener = Callable[[], Awaitable[httpx.Response]]


class ClaudeStreamIterator(BaseStreamIterator):
    """Stream iterator that reads SSE lines from an open HTTP response.

    The HTTP request is deferred until the first update is requested, so
    credential and transport failures surface from ``__anext__``.
    """

    def __init__(
        self,
        opener: ResponseOpener,
        *,
        normalizer: StreamNormalizer | None = None,
    ) -> None:
        self._opener = opener
        self._response: httpx.Response | None = None
        self._lines: AsyncIterator[str] | None = None
        self._stream_closed = False
        super().__init__(normalizer or ClaudeStreamNormalizer())

    async def _get_next_chunk(self) -> str:
        if self._lines is None:
            self._response = await self._opener()
            self._lines = self._response.aiter_lines()

        try:
            line = await self._lines.__anext__()
        except httpx.HTTPError as exc:
            msg = f"stream read failed: {exc}"
            raise TransportError(msg) from exc

        if is_done_line(line):
            LOGGER.debug("received stream termination sentinel")
            raise StopAsyncIteration
        return line

    async def _on_close(self) -> None:
        if self._stream_closed:
            return
        self._stream_closed = True

        # The response goes first so a read pending in another task is unblocked.
        try:
            await _close_resource(self._response)
        finally:
            try:
                await _close_resource(self._lines)
            except RuntimeError:
                # Still suspended in another task; it ends once the response is gone.
                LOGGER.debug("line iterator busy while closing the stream")


async def _close_resource(resource: Any) -> None:
    if resource is None:
        return
    closer: Any = getattr(resource, "aclose", None)
    if closer is None:
        return
    result = closer()
    if inspect.isawaitable(result):
        await result


async def replay_updates(updates: AsyncIterator[StreamingUpdate]) -> str:
    """Concatenate the text of every update, closing the iterator afterwards."""

    fragments: List[str] = []
    try:
        async for update in updates:
            if update.text is not None:
                fragments.append(update.text)
    finally:
        closer = getattr(updates, "aclose", None)
        if closer is not None and callable(closer):
            result = closer()
            if inspect.isawaitable(result):
                await result
    return "".join(fragments)


__all__ = [
    "BaseStreamIterator",
    "ClaudeStreamIterator",
    "ClaudeStreamNormalizer",
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "StreamNormalizer",
    "StreamState",
    "event_to_update",
    "is_done_line",
    "parse_event",
    "replay_updates",
]
