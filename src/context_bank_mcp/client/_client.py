"""
Asynchronous client for the Onyx chat API.

`OnyxClient` issues one POST per call and reports every outcome through `OnyxResult`. Transport
failures, non-2xx statuses, empty bodies and undecodable bodies are logged and returned as
failed results, so no exception crosses the client boundary once a request has been attempted.
There is no retry and no timeout override beyond aiohttp's defaults.
"""

import asyncio
import json
import logging
from types import TracebackType
from typing import Any

import aiohttp

from .._exceptions import OnyxClientError, ResponseDecodeError
from ..config import ContextBankConfig
from ._parser import parse_response_body
from ._requests import (
    CREATE_CHAT_SESSION_PATH,
    DOCUMENT_SEARCH_PATH,
    SEND_MESSAGE_PATH,
    build_create_chat_session_request,
    build_document_search_request,
    build_send_message_request,
)
from ._result import OnyxResult

_LOGGER = logging.getLogger(__name__)


class OnyxClient:
    """
    Async client for an Onyx deployment.

    The client can own its aiohttp session (created on first use and closed by `close()` or on
    leaving the `async with` block), or use an injected session, which it never closes.

    Attributes:
        base_url (str): Onyx base URL without a trailing slash.
        api_key (str | None): Bearer token, or None to send no Authorization header.

    Example:
        >>> async with OnyxClient("http://localhost:3000") as client:
        ...     result = await client.document_search("release notes")
        ...     if result.ok:
        ...         print(result.data["top_documents"])
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        session: aiohttp.ClientSession | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize an OnyxClient.

        Args:
            base_url (str): Base URL of the Onyx deployment, e.g. "http://localhost:3000".
            api_key (str | None): Optional bearer token.
            session (aiohttp.ClientSession | None): Optional session to use instead of creating one.
            logger (logging.Logger | None): Logger for request failures. Defaults to this module's logger.

        Raises:
            OnyxClientError: If base_url is empty or not a string.
        """
        if not base_url or not isinstance(base_url, str):
            raise OnyxClientError("base_url must be a non-empty string.")
        self.base_url: str = base_url.rstrip("/")
        self.api_key: str | None = api_key or None
        self._session: aiohttp.ClientSession | None = session
        self._owns_session: bool = session is None
        self._logger: logging.Logger = logger or _LOGGER

    @classmethod
    def from_config(
        cls, config: ContextBankConfig, logger: logging.Logger | None = None
    ) -> "OnyxClient":
        """Create a client for the Onyx deployment described by `config`."""
        return cls(config.onyx_api_base, api_key=config.onyx_api_key, logger=logger)

    async def __aenter__(self) -> "OnyxClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the aiohttp session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    @property
    def headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def url(self, path: str) -> str:
        """Join the base URL with an API path."""
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    async def post(
        self, url: str, body: Any, streaming: bool = False
    ) -> OnyxResult:
        """
        POST a JSON body and decode the response.

        Args:
            url (str): Absolute URL of the endpoint.
            body (Any): JSON-serializable request body.
            streaming (bool): If True, decode the body with `parse_response_body`, which also
                accepts the sentinel-anchored stream layout of the send-message endpoint.

        Returns:
            OnyxResult: SUCCESS with the decoded body; TRANSPORT_ERROR for network errors,
                timeouts and non-2xx statuses; DECODE_ERROR for empty or undecodable bodies.
        """
        self._logger.debug(
            f"[client:OnyxClient.post] POST {url} | streaming={streaming}"
        )
        try:
            async with self._get_session().post(
                url, json=body, headers=self.headers
            ) as response:
                response.raise_for_status()
                status = response.status
                raw_body = await response.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            error = f"Error making Onyx request to {url}: {type(exc).__name__}: {exc}"
            self._logger.error(f"[client:OnyxClient.post] {error}")
            return OnyxResult.transport_error(error)

        if not raw_body.strip():
            error = f"Empty response body from {url} (HTTP status: {status})"
            self._logger.error(f"[client:OnyxClient.post] {error}")
            return OnyxResult.decode_error(error)

        try:
            data = parse_response_body(raw_body) if streaming else json.loads(raw_body)
        except (ResponseDecodeError, ValueError) as exc:
            error = f"Error decoding Onyx response from {url}: {exc}"
            self._logger.error(f"[client:OnyxClient.post] {error}")
            return OnyxResult.decode_error(error)

        if data is None:
            error = f"Onyx response from {url} decoded to null (HTTP status: {status})"
            self._logger.error(f"[client:OnyxClient.post] {error}")
            return OnyxResult.decode_error(error)

        return OnyxResult.success(data)

    async def create_chat_session(
        self, persona_id: int | None = None, description: str | None = None
    ) -> OnyxResult:
        """Create a chat session. On success `data` is a `CreateChatSessionResponse`."""
        body = build_create_chat_session_request(persona_id, description)
        return await self.post(self.url(CREATE_CHAT_SESSION_PATH), body)

    async def send_message(
        self,
        chat_session_id: str,
        message: str,
        parent_message_id: int | None = None,
    ) -> OnyxResult:
        """Send a chat message. On success `data` is a `SendMessageResponse`."""
        body = build_send_message_request(chat_session_id, message, parent_message_id)
        return await self.post(self.url(SEND_MESSAGE_PATH), body, streaming=True)

    async def document_search(self, message: str) -> OnyxResult:
        """Run a semantic document search. On success `data` is a `DocumentSearchResponse`."""
        body = build_document_search_request(message)
        return await self.post(self.url(DOCUMENT_SEARCH_PATH), body)
