"""Pydantic models mirroring the Claude Messages API JSON schema."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class ClaudeMessage(BaseModel):
    """A single conversational turn in a request."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    role: Literal["user", "assistant"] = Field(..., description="Speaker of the turn.")
    content: str = Field(..., description="Plain text of the turn.")


class ClaudeRequest(BaseModel):
    """Request body sent to the messages endpoint."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    model: str = Field(..., description="Model or deployment identifier.")
    messages: List[ClaudeMessage] = Field(default_factory=list, description="Non-system turns in order.")
    system: str | None = Field(None, description="Merged system directive, if any.")
    max_tokens: int = Field(..., description="Upper bound on generated tokens.")
    temperature: float | None = Field(None, description="Sampling temperature.")
    top_p: float | None = Field(None, description="Nucleus sampling threshold.")
    stream: bool = Field(False, description="Whether the response is delivered as server-sent events.")

    def to_json(self) -> str:
        """Serialize for the wire, omitting unset optional fields."""

        return self.model_dump_json(exclude_none=True)


class ClaudeContent(BaseModel):
    """A content block in a response."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str | None = None
    text: str | None = None


class ClaudeUsage(BaseModel):
    """Token usage reported by the service."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    input_tokens: int = 0
    output_tokens: int = 0


class ClaudeResponse(BaseModel):
    """Buffered response body returned by the messages endpoint."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str | None = None
    model: str | None = None
    stop_reason: str | None = None
    content: List[ClaudeContent] | None = None
    usage: ClaudeUsage | None = None


class ClaudeDelta(BaseModel):
    """Incremental payload carried by a streaming event."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    text: str | None = None


class ClaudeStreamingEvent(BaseModel):
    """One server-sent event decoded from a ``data:`` line."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str | None = None
    delta: ClaudeDelta | None = None


__all__ = [
    "ClaudeContent",
    "ClaudeDelta",
    "ClaudeMessage",
    "ClaudeRequest",
    "ClaudeResponse",
    "ClaudeStreamingEvent",
    "ClaudeUsage",
]
