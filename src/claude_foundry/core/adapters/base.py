"""Chat client interface shared by provider implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, TypeVar

from ..completion import ChatCompletion, ChatOptions, ClientMetadata
from ..message import ChatMessage
from .stream import BaseStreamIterator

ServiceT = TypeVar("ServiceT")


class ChatClient(ABC):
    """Abstract interface for provider-specific chat clients."""

    @property
    @abstractmethod
    def metadata(self) -> ClientMetadata:
        """Describe the provider and model behind this client."""

    @abstractmethod
    async def complete(
        self,
        messages: Sequence[ChatMessage],
        options: ChatOptions | None = None,
    ) -> ChatCompletion:
        """Send the conversation and return the assistant's complete reply."""

    @abstractmethod
    def complete_streaming(
        self,
        messages: Sequence[ChatMessage],
        options: ChatOptions | None = None,
    ) -> BaseStreamIterator:
        """Return an async iterator that yields incremental updates."""

    def get_service(self, service_type: type[ServiceT], service_key: Any | None = None) -> ServiceT | None:
        """Return this client when it satisfies ``service_type``, otherwise ``None``."""

        if isinstance(self, service_type):
            return self
        return None

    async def aclose(self) -> None:
        """Release resources owned by the client."""

    async def __aenter__(self) -> ChatClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
