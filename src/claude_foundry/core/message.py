"""Message schema shared across adapters."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union


class ChatRole(str, Enum):
    """Canonical role names accepted in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True, slots=True)
class TextContent:
    """Plain text attached to a message."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            msg = "text content must be a string"
            raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class DataContent:
    """Binary or remote payload attached to a message.

    Data parts are carried for callers that share conversations between
    providers; the Claude request builder only maps text.
    """

    uri: str
    media_type: str | None = None


ContentPart = Union[TextContent, DataContent]


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """A single role-tagged turn exchanged with a language model.

    ``contents`` accepts either a plain string, which is shorthand for a single
    :class:`TextContent`, or a sequence of content parts.
    """

    role: ChatRole
    contents: tuple[ContentPart, ...] = ()

    def __post_init__(self) -> None:
        try:
            role = ChatRole(self.role)
        except ValueError as exc:
            msg = f"unsupported role '{self.role}'"
            raise ValueError(msg) from exc
        object.__setattr__(self, "role", role)

        contents = self.contents
        if isinstance(contents, str):
            normalized: tuple[ContentPart, ...] = (TextContent(contents),)
        elif isinstance(contents, (TextContent, DataContent)):
            normalized = (contents,)
        elif isinstance(contents, Sequence) and not isinstance(contents, (bytes, bytearray)):
            normalized = tuple(contents)
            for part in normalized:
                if not isinstance(part, (TextContent, DataContent)):
                    msg = "message contents must be TextContent or DataContent instances"
                    raise TypeError(msg)
        else:
            msg = "message contents must be a string or a sequence of content parts"
            raise TypeError(msg)
        object.__setattr__(self, "contents", normalized)

    @property
    def text(self) -> str:
        """Return the text parts joined by newlines, ignoring other content."""

        return "\n".join(part.text for part in self.contents if isinstance(part, TextContent))
