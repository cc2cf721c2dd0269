"""Generic completion options and results returned by chat clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .message import ChatMessage, ChatRole


class FinishReason(str, Enum):
    """Why the model stopped producing output."""

    STOP = "stop"
    LENGTH = "length"


@dataclass(frozen=True, slots=True)
class ChatOptions:
    """Optional generation parameters forwarded to the provider unchanged."""

    max_output_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None


@dataclass(frozen=True, slots=True)
class UsageDetails:
    """Token accounting for a single completion."""

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass(frozen=True, slots=True)
class ChatCompletion:
    """Result of a buffered completion call."""

    message: ChatMessage
    completion_id: str | None = None
    model_id: str | None = None
    finish_reason: FinishReason | None = None
    usage: UsageDetails = field(default_factory=UsageDetails)

    @property
    def text(self) -> str:
        return self.message.text


@dataclass(frozen=True, slots=True)
class StreamingUpdate:
    """Incremental assistant output emitted while streaming."""

    text: str | None = None
    finish_reason: FinishReason | None = None
    role: ChatRole = ChatRole.ASSISTANT


@dataclass(frozen=True, slots=True)
class ClientMetadata:
    """Descriptive information about a configured chat client."""

    provider_name: str
    model_id: str
    endpoint: str | None = None
