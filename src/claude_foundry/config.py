"""Configuration helpers shared by the command line and client factories."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

from .core.errors import ConfigurationError

if TYPE_CHECKING:
    from .core.adapters.claude import AzureClaudeClient

ENDPOINT_VAR = "AZURE_CLAUDE_ENDPOINT"
MODEL_VAR = "AZURE_CLAUDE_MODEL"
API_KEY_VAR = "AZURE_CLAUDE_APIKEY"
PROVIDER_NAME_VAR = "AZURE_CLAUDE_PROVIDER_NAME"
TIMEOUT_VAR = "AZURE_CLAUDE_TIMEOUT"

DEFAULT_MODEL = "claude-sonnet-4-5"
DEFAULT_PROVIDER_NAME = "Azure AI Foundry"
DEFAULT_TIMEOUT_SECONDS = 120.0


@dataclass(slots=True)
class ClientConfig:
    """Settings required to reach a Claude deployment.

    Attributes
    ----------
    endpoint:
        Full URL of the deployment's messages endpoint.
    model_id:
        Model or deployment identifier sent with every request.
    api_key:
        Optional static key. When absent the client authenticates with an
        Azure token credential instead.
    provider_name:
        Name reported through the client's metadata.
    timeout:
        Read timeout in seconds for HTTP calls made by a client-owned
        transport.
    """

    endpoint: str
    model_id: str = DEFAULT_MODEL
    api_key: str | None = None
    provider_name: str = DEFAULT_PROVIDER_NAME
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __repr__(self) -> str:
        masked = None if self.api_key is None else "***"
        return (
            f"{type(self).__name__}(endpoint={self.endpoint!r}, model_id={self.model_id!r}, "
            f"api_key={masked!r}, provider_name={self.provider_name!r}, timeout={self.timeout!r})"
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        """Build a :class:`ClientConfig` from environment variables.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        """

        env = os.environ if environ is None else environ

        endpoint = env.get(ENDPOINT_VAR, "").strip()
        if not endpoint:
            raise ConfigurationError(f"set {ENDPOINT_VAR} in the environment")

        model_id = env.get(MODEL_VAR, "").strip() or DEFAULT_MODEL

        api_key = env.get(API_KEY_VAR)
        if api_key is not None and not api_key.strip():
            raise ConfigurationError(f"{API_KEY_VAR} must not be blank when set")

        provider_name = env.get(PROVIDER_NAME_VAR, "").strip() or DEFAULT_PROVIDER_NAME

        raw_timeout = env.get(TIMEOUT_VAR, "").strip()
        timeout = DEFAULT_TIMEOUT_SECONDS
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigurationError(f"{TIMEOUT_VAR} must be a number, got '{raw_timeout}'") from exc
            if timeout <= 0:
                raise ConfigurationError(f"{TIMEOUT_VAR} must be positive")

        return cls(
            endpoint=endpoint,
            model_id=model_id,
            api_key=api_key,
            provider_name=provider_name,
            timeout=timeout,
        )

    def create_client(self, *, credential: Any | None = None) -> "AzureClaudeClient":
        """Return a client for this configuration.

        Without an api key, ``credential`` defaults to
        ``azure.identity.aio.DefaultAzureCredential``. A credential created
        here is owned by the client and closed by its ``aclose()``; one passed
        in stays with the caller.
        """

        from .core.adapters.claude import AzureClaudeClient

        owns_credential = False
        if self.api_key is None and credential is None:
            from azure.identity.aio import DefaultAzureCredential

            credential = DefaultAzureCredential()
            owns_credential = True
        return AzureClaudeClient.from_config(self, credential=credential, owns_credential=owns_credential)
