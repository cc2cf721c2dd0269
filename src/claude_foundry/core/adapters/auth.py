"""Credential resolution for outbound requests."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Protocol

from ..errors import AuthenticationError, ConfigurationError

LOGGER = logging.getLogger(__name__)

DEFAULT_SCOPE = "https://cognitiveservices.azure.com/.default"


class Authenticator(Protocol):
    """Produce the single header that authorizes one request."""

    async def authorize(self) -> dict[str, str]:
        """Return the authorization header for the next request."""


class TokenCredentialAuthenticator:
    """Attach a bearer token obtained from an Azure token credential.

    Both ``azure.core.credentials.TokenCredential`` and the ``aio`` variant are
    accepted. Blocking ``get_token`` implementations run in a worker thread;
    awaitable results are awaited. Tokens are requested on every call so the
    credential's own cache decides when to refresh.
    """

    def __init__(self, credential: Any, *, scope: str = DEFAULT_SCOPE) -> None:
        if credential is None:
            msg = "a token credential is required"
            raise ConfigurationError(msg)
        if not callable(getattr(credential, "get_token", None)):
            msg = "credential must expose get_token()"
            raise ConfigurationError(msg)
        self._credential = credential
        self._scope = scope

    @property
    def scope(self) -> str:
        return self._scope

    async def authorize(self) -> dict[str, str]:
        get_token = self._credential.get_token
        try:
            if inspect.iscoroutinefunction(get_token):
                result = await get_token(self._scope)
            else:
                # Blocking credentials run off the event loop.
                result = await asyncio.to_thread(get_token, self._scope)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            LOGGER.debug("token request for scope %s failed", self._scope)
            msg = f"failed to acquire a token for scope '{self._scope}'"
            raise AuthenticationError(msg) from exc

        token = getattr(result, "token", None)
        if not isinstance(token, str) or not token:
            msg = "credential returned an empty access token"
            raise AuthenticationError(msg)
        return {"Authorization": f"Bearer {token}"}


class ApiKeyAuthenticator:
    """Attach a static key using the ``x-api-key`` header."""

    def __init__(self, api_key: str) -> None:
        if not isinstance(api_key, str) or not api_key.strip():
            msg = "api key must be a non-empty string"
            raise ConfigurationError(msg)
        self._api_key = api_key

    def __repr__(self) -> str:
        return f"{type(self).__name__}(api_key='***')"

    async def authorize(self) -> dict[str, str]:
        return {"x-api-key": self._api_key}


__all__ = [
    "ApiKeyAuthenticator",
    "Authenticator",
    "DEFAULT_SCOPE",
    "TokenCredentialAuthenticator",
]
