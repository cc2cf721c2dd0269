"""Claude on Azure AI Foundry behind the generic chat client interface."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import httpx

from ..completion import ChatCompletion, ChatOptions, ClientMetadata
from ..errors import ConfigurationError
from ..message import ChatMessage
from .auth import ApiKeyAuthenticator, Authenticator, TokenCredentialAuthenticator
from .base import ChatClient
from .stream import ClaudeStreamIterator
from .transport import DEFAULT_TIMEOUT, ClaudeTransport
from .utils import SystemPromptStrategy, build_request, map_response

if TYPE_CHECKING:
    from ...config import ClientConfig

LOGGER = logging.getLogger(__name__)

DEFAULT_PROVIDER_NAME = "Azure AI Foundry"


class AzureClaudeClient(ChatClient):
    """Translate generic conversations to Claude models deployed in Azure AI Foundry.

    Exactly one credential form must be supplied: an Azure token credential
    (``credential``) for bearer authentication, or a static ``api_key`` sent as
    ``x-api-key``. The client holds no conversation state; concurrent calls
    share only the read-only configuration and the HTTP client.

    With ``owns_credential=True`` the token credential is closed together with
    the client; otherwise the caller remains responsible for it.
    """

    def __init__(
        self,
        endpoint: str,
        model_id: str,
        credential: Any | None = None,
        *,
        api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        provider_name: str = DEFAULT_PROVIDER_NAME,
        system_strategy: SystemPromptStrategy = SystemPromptStrategy.CONCATENATE,
        timeout: httpx.Timeout | float | None = DEFAULT_TIMEOUT,
        owns_credential: bool = False,
    ) -> None:
        self._endpoint = _validate_endpoint(endpoint)
        if not isinstance(model_id, str) or not model_id.strip():
            msg = "a model id must be provided"
            raise ConfigurationError(msg)
        self._model_id = model_id
        self._provider_name = provider_name
        self._system_strategy = SystemPromptStrategy(system_strategy)
        self._credential = credential
        self._owns_credential = owns_credential and credential is not None

        authenticator: Authenticator
        if credential is not None and api_key is not None:
            msg = "provide either a token credential or an api key, not both"
            raise ConfigurationError(msg)
        if credential is not None:
            authenticator = TokenCredentialAuthenticator(credential)
        elif api_key is not None:
            authenticator = ApiKeyAuthenticator(api_key)
        else:
            msg = "a token credential or an api key is required"
            raise ConfigurationError(msg)

        self._transport = ClaudeTransport(
            self._endpoint,
            authenticator,
            http_client=http_client,
            timeout=timeout,
        )

    @classmethod
    def from_api_key(
        cls,
        endpoint: str,
        model_id: str,
        api_key: str,
        **kwargs: Any,
    ) -> AzureClaudeClient:
        """Build a client that authenticates with a static api key."""

        return cls(endpoint, model_id, api_key=api_key, **kwargs)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        credential: Any | None = None,
        http_client: httpx.AsyncClient | None = None,
        owns_credential: bool = False,
    ) -> AzureClaudeClient:
        """Build a client from a :class:`~claude_foundry.config.ClientConfig`.

        The config's api key wins when present; otherwise ``credential`` is
        used for bearer authentication.
        """

        if config.api_key is not None:
            return cls(
                config.endpoint,
                config.model_id,
                api_key=config.api_key,
                http_client=http_client,
                provider_name=config.provider_name,
                timeout=config.timeout,
            )
        return cls(
            config.endpoint,
            config.model_id,
            credential,
            http_client=http_client,
            provider_name=config.provider_name,
            timeout=config.timeout,
            owns_credential=owns_credential,
        )

    @property
    def metadata(self) -> ClientMetadata:
        return ClientMetadata(
            provider_name=self._provider_name,
            model_id=self._model_id,
            endpoint=self._endpoint,
        )

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        options: ChatOptions | None = None,
    ) -> ChatCompletion:
        request = build_request(
            messages,
            options,
            model_id=self._model_id,
            stream=False,
            system_strategy=self._system_strategy,
        )
        response = await self._transport.send(request)
        completion = map_response(response)
        LOGGER.debug(
            "completion %s finished with %s (%d tokens)",
            completion.completion_id,
            completion.finish_reason,
            completion.usage.total_tokens,
        )
        return completion

    def complete_streaming(
        self,
        messages: Sequence[ChatMessage],
        options: ChatOptions | None = None,
    ) -> ClaudeStreamIterator:
        request = build_request(
            messages,
            options,
            model_id=self._model_id,
            stream=True,
            system_strategy=self._system_strategy,
        )

        async def _open() -> httpx.Response:
            return await self._transport.open_stream(request)

        return ClaudeStreamIterator(_open)

    @property
    def owns_credential(self) -> bool:
        return self._owns_credential

    async def aclose(self) -> None:
        try:
            await self._transport.aclose()
        finally:
            if self._owns_credential:
                self._owns_credential = False
                closer = getattr(self._credential, "close", None)
                if closer is not None:
                    result = closer()
                    if inspect.isawaitable(result):
                        await result


def _validate_endpoint(endpoint: Any) -> str:
    if endpoint is None:
        msg = "an endpoint must be provided"
        raise ConfigurationError(msg)

    raw = str(endpoint).strip()
    if not raw:
        msg = "an endpoint must be provided"
        raise ConfigurationError(msg)

    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        msg = f"invalid endpoint '{raw}'"
        raise ConfigurationError(msg) from exc
    if url.scheme not in {"http", "https"} or not url.host:
        msg = f"endpoint must be an absolute http(s) URL, got '{raw}'"
        raise ConfigurationError(msg)
    return raw


__all__ = ["AzureClaudeClient", "DEFAULT_PROVIDER_NAME"]
