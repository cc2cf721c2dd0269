from __future__ import annotations

import asyncio

import pytest

from claude_foundry.core import ChatMessage, ChatOptions, ChatRole, TransportError
from claude_foundry.core.adapters import AzureClaudeClient
from claude_foundry.core.adapters.stream import replay_updates

from tests.fixtures import claude_fake
from tests.harness import BaseEvent, collect


def _build_client(respond) -> tuple[AzureClaudeClient, claude_fake.RecordingHandler]:
    http_client, handler = claude_fake.build_http_client(respond)
    client = AzureClaudeClient(
        claude_fake.ENDPOINT,
        claude_fake.MODEL_ID,
        api_key="secret",
        http_client=http_client,
    )
    return client, handler


def test_streaming_emits_text_updates_then_finish() -> None:
    client, handler = _build_client(claude_fake.sse_response(claude_fake.hello_stream_lines()))

    events = collect(client, prompt="Say hello", system_prompt="Greeter")

    assert events == [
        BaseEvent.text_update("He"),
        BaseEvent.text_update("llo"),
        BaseEvent.finish("stop"),
    ]

    [payload] = handler.payloads
    assert payload["stream"] is True
    assert payload["system"] == "Greeter"
    assert payload["messages"] == [{"role": "user", "content": "Say hello"}]


def test_streaming_forwards_options() -> None:
    client, handler = _build_client(claude_fake.sse_response(["data: [DONE]"]))

    events = collect(
        client,
        prompt="hi",
        system_prompt=None,
        options=ChatOptions(max_output_tokens=64, top_p=0.5),
    )

    assert events == []
    [payload] = handler.payloads
    assert payload["max_tokens"] == 64
    assert payload["top_p"] == 0.5
    assert "temperature" not in payload
    assert "system" not in payload


def test_streaming_is_lazy_until_iterated() -> None:
    client, handler = _build_client(claude_fake.sse_response(claude_fake.hello_stream_lines()))

    stream = client.complete_streaming([ChatMessage(ChatRole.USER, "hi")])

    assert handler.requests == []
    assert asyncio.run(replay_updates(stream)) == "Hello"
    assert len(handler.requests) == 1


def test_streaming_error_status_raises_on_first_update() -> None:
    client, _ = _build_client(claude_fake.json_response({"error": "bad request"}, status_code=400))
    stream = client.complete_streaming([ChatMessage(ChatRole.USER, "hi")])

    async def _run() -> None:
        async for _ in stream:
            pass

    with pytest.raises(TransportError) as excinfo:
        asyncio.run(_run())

    assert excinfo.value.status_code == 400


def test_streaming_drops_malformed_events() -> None:
    lines = [
        claude_fake.text_delta("A"),
        "data: {broken",
        claude_fake.text_delta("B"),
        'data: {"type":"message_stop"}',
        "data: [DONE]",
    ]
    client, _ = _build_client(claude_fake.sse_response(lines))

    events = collect(client, prompt="hi")

    assert events == [BaseEvent.text_update("A"), BaseEvent.text_update("B"), BaseEvent.finish()]
