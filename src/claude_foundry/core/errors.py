"""Custom exception types raised by the Claude client."""

from __future__ import annotations


class AdapterError(RuntimeError):
    """Raised when an adapter cannot fulfil a request."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigurationError(AdapterError, ValueError):
    """Raised at construction time when required settings are missing or invalid."""


class AuthenticationError(AdapterError):
    """Raised when the credential provider fails to produce a token."""


class TransportError(AdapterError):
    """Raised for non-success HTTP statuses and network failures."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResponseDecodeError(AdapterError):
    """Raised when a buffered response body cannot be decoded."""
