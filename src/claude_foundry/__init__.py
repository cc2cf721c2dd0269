"""Vendor-neutral chat client for Claude models hosted in Azure AI Foundry.

The package maps generic conversations onto the Claude Messages API,
authenticates with either an Azure token credential or a static api key, and
decodes buffered JSON or server-sent event responses back into generic
completion results and streaming updates.
"""

from __future__ import annotations

from .config import ClientConfig
from .core import (
    AdapterError,
    AuthenticationError,
    ChatCompletion,
    ChatMessage,
    ChatOptions,
    ChatRole,
    ClientMetadata,
    ConfigurationError,
    FinishReason,
    ResponseDecodeError,
    StreamingUpdate,
    TextContent,
    TransportError,
    UsageDetails,
)
from .core.adapters import AzureClaudeClient, ChatClient

__all__ = [
    "AdapterError",
    "AuthenticationError",
    "AzureClaudeClient",
    "ChatClient",
    "ChatCompletion",
    "ChatMessage",
    "ChatOptions",
    "ChatRole",
    "ClientConfig",
    "ClientMetadata",
    "ConfigurationError",
    "FinishReason",
    "ResponseDecodeError",
    "StreamingUpdate",
    "TextContent",
    "TransportError",
    "UsageDetails",
]

__version__ = "0.1.0"
