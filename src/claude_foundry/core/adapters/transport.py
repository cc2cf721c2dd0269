"""HTTP exchange with the Claude messages endpoint."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from ..errors import ResponseDecodeError, TransportError
from .auth import Authenticator
from .wire import ClaudeRequest, ClaudeResponse

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(120.0, connect=10.0)

_ERROR_BODY_LIMIT = 512


class ClaudeTransport:
    """POST Claude requests and return decoded responses or open streams.

    When ``http_client`` is omitted a private :class:`httpx.AsyncClient` is
    created and closed by :meth:`aclose`. A caller supplied client is never
    closed here.
    """

    def __init__(
        self,
        endpoint: str,
        authenticator: Authenticator,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: httpx.Timeout | float | None = DEFAULT_TIMEOUT,
    ) -> None:
        self._endpoint = endpoint
        self._authenticator = authenticator
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)

    @property
    def owns_client(self) -> bool:
        return self._owns_client

    async def send(self, request: ClaudeRequest) -> ClaudeResponse:
        """Send a buffered request and decode the full response body."""

        http_request = await self._build_http_request(request)
        try:
            response = await self._client.send(http_request)
        except httpx.RequestError as exc:
            msg = f"request to {self._endpoint} failed: {exc}"
            raise TransportError(msg) from exc

        LOGGER.debug("received status %s from %s", response.status_code, self._endpoint)
        if not response.is_success:
            self._raise_for_status(response, response.text)

        try:
            return ClaudeResponse.model_validate_json(response.content)
        except ValidationError as exc:
            msg = "failed to deserialize the response body"
            raise ResponseDecodeError(msg) from exc

    async def open_stream(self, request: ClaudeRequest) -> httpx.Response:
        """Send a streaming request and return once the headers have arrived.

        The returned response is open; the caller must close it with
        ``aclose()`` once the body has been consumed or abandoned.
        """

        http_request = await self._build_http_request(request)
        try:
            response = await self._client.send(http_request, stream=True)
        except httpx.RequestError as exc:
            msg = f"streaming request to {self._endpoint} failed: {exc}"
            raise TransportError(msg) from exc

        LOGGER.debug("stream opened with status %s from %s", response.status_code, self._endpoint)
        if not response.is_success:
            try:
                body = (await response.aread()).decode("utf-8", errors="replace")
            except httpx.HTTPError:
                body = ""
            finally:
                await response.aclose()
            self._raise_for_status(response, body)
        return response

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _build_http_request(self, request: ClaudeRequest) -> httpx.Request:
        headers = {"Content-Type": "application/json"}
        headers.update(await self._authenticator.authorize())
        LOGGER.debug(
            "sending request to %s (model=%s, stream=%s)",
            self._endpoint,
            request.model,
            request.stream,
        )
        return self._client.build_request(
            "POST",
            self._endpoint,
            content=request.to_json().encode("utf-8"),
            headers=headers,
        )

    def _raise_for_status(self, response: httpx.Response, body: str) -> None:
        LOGGER.warning("request to %s failed with status %s", self._endpoint, response.status_code)
        detail = body.strip()[:_ERROR_BODY_LIMIT]
        msg = f"request failed with status {response.status_code}"
        if detail:
            msg = f"{msg}: {detail}"
        raise TransportError(msg, status_code=response.status_code)


__all__ = ["ClaudeTransport", "DEFAULT_TIMEOUT"]
