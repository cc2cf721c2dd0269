"""Core data structures and error types for the Claude client."""

from __future__ import annotations

from .completion import (
    ChatCompletion,
    ChatOptions,
    ClientMetadata,
    FinishReason,
    StreamingUpdate,
    UsageDetails,
)
from .errors import (
    AdapterError,
    AuthenticationError,
    ConfigurationError,
    ResponseDecodeError,
    TransportError,
)
from .message import ChatMessage, ChatRole, DataContent, TextContent

__all__ = [
    "AdapterError",
    "AuthenticationError",
    "ChatCompletion",
    "ChatMessage",
    "ChatOptions",
    "ChatRole",
    "ClientMetadata",
    "ConfigurationError",
    "DataContent",
    "FinishReason",
    "ResponseDecodeError",
    "StreamingUpdate",
    "TextContent",
    "TransportError",
    "UsageDetails",
]
