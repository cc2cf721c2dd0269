"""Pure conversion helpers between generic chat types and Claude wire models."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from ..completion import ChatCompletion, ChatOptions, FinishReason, UsageDetails
from ..message import ChatMessage, ChatRole
from .wire import ClaudeMessage, ClaudeRequest, ClaudeResponse

DEFAULT_MAX_TOKENS = 1024

_FINISH_REASONS = {
    "end_turn": FinishReason.STOP,
    "stop_sequence": FinishReason.STOP,
    "max_tokens": FinishReason.LENGTH,
}


class SystemPromptStrategy(str, Enum):
    """How multiple system turns collapse into the single ``system`` field."""

    CONCATENATE = "concatenate"
    LAST = "last"


def build_request(
    messages: Sequence[ChatMessage],
    options: ChatOptions | None,
    *,
    model_id: str,
    stream: bool,
    system_strategy: SystemPromptStrategy = SystemPromptStrategy.CONCATENATE,
) -> ClaudeRequest:
    """Convert a conversation into a Claude request body."""

    system_parts: list[str] = []
    converted: list[ClaudeMessage] = []
    for message in messages:
        if message.role is ChatRole.SYSTEM:
            if system_strategy is SystemPromptStrategy.LAST:
                system_parts = [message.text]
            else:
                system_parts.append(message.text)
            continue

        role = "user" if message.role is ChatRole.USER else "assistant"
        converted.append(ClaudeMessage(role=role, content=message.text))

    options = options or ChatOptions()
    return ClaudeRequest(
        model=model_id,
        messages=converted,
        system="\n".join(system_parts) if system_parts else None,
        max_tokens=DEFAULT_MAX_TOKENS if options.max_output_tokens is None else options.max_output_tokens,
        temperature=options.temperature,
        top_p=options.top_p,
        stream=stream,
    )


def map_finish_reason(stop_reason: str | None) -> FinishReason | None:
    """Translate a Claude ``stop_reason`` into a generic finish reason."""

    if stop_reason is None:
        return None
    return _FINISH_REASONS.get(stop_reason)


def map_response(response: ClaudeResponse) -> ChatCompletion:
    """Normalize a buffered Claude response into a :class:`ChatCompletion`."""

    text = ""
    if response.content:
        text = response.content[0].text or ""

    usage = response.usage
    return ChatCompletion(
        message=ChatMessage(ChatRole.ASSISTANT, text),
        completion_id=response.id,
        model_id=response.model,
        finish_reason=map_finish_reason(response.stop_reason),
        usage=UsageDetails(
            input_tokens=usage.input_tokens if usage is not None else 0,
            output_tokens=usage.output_tokens if usage is not None else 0,
        ),
    )


__all__ = [
    "DEFAULT_MAX_TOKENS",
    "SystemPromptStrategy",
    "build_request",
    "map_finish_reason",
    "map_response",
]
