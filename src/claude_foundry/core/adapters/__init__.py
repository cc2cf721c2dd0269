"""Chat client interfaces and the Claude provider implementation."""

from __future__ import annotations

from .auth import ApiKeyAuthenticator, Authenticator, TokenCredentialAuthenticator
from .base import ChatClient
from .claude import AzureClaudeClient
from .stream import BaseStreamIterator, ClaudeStreamIterator, StreamState, replay_updates
from .transport import ClaudeTransport
from .utils import SystemPromptStrategy, build_request, map_finish_reason, map_response

__all__ = [
    "ApiKeyAuthenticator",
    "Authenticator",
    "AzureClaudeClient",
    "BaseStreamIterator",
    "ChatClient",
    "ClaudeStreamIterator",
    "ClaudeTransport",
    "StreamState",
    "SystemPromptStrategy",
    "TokenCredentialAuthenticator",
    "build_request",
    "map_finish_reason",
    "map_response",
    "replay_updates",
]
