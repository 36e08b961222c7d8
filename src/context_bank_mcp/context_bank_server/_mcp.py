"""
Context Bank MCP Tools Module.

This module defines the FastMCP server and tools that expose an Onyx knowledge-base deployment
(the AtherOS knowledge base) to LLM hosts.

Architecture:
    - FastMCP server named "context-bank" with a /health endpoint for the HTTP transports
    - Configuration loaded once from the environment and shared through the lifespan context
    - Per-request OnyxClient creation; tool calls share no mutable state
    - Every tool returns a non-empty list of text blocks, including on failure

MCP Tools:
    - create-chat-session: Create a chat session and report its id.
    - query-atheros: Send a message to a chat session and render the answer with its top source.
    - document-search: Semantic search returning up to three documents, one text block each.

Environment Variables:
    See `context_bank_mcp.config` for ONYX_API_BASE, ONYX_API_KEY, LOG_LEVEL,
    CONTEXT_BANK_HOST and CONTEXT_BANK_PORT.

Usage:
    >>> from context_bank_mcp.context_bank_server._mcp import document_search
    >>> result = await document_search(context=ctx, message="release process")
    >>> print(result[0].text)
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import TextContent
from starlette.requests import Request
from starlette.responses import JSONResponse

from ..client import OnyxClient
from ..config import ContextBankConfig
from ..formatters import format_search_document, format_send_message_response

_LOGGER = logging.getLogger(__name__)

KNOWLEDGE_BASE_NAME = "AtherOS's knowledge base"

CREATE_SESSION_FAILED_TEXT = (
    f"Failed to create chat session for querying the {KNOWLEDGE_BASE_NAME}"
)
MISSING_SESSION_ID_TEXT = "Failed to get chat session id"
SEARCH_FAILED_TEXT = f"Failed to search for documents in the {KNOWLEDGE_BASE_NAME}"
NO_DOCUMENTS_FOUND_TEXT = f"No documents found in the {KNOWLEDGE_BASE_NAME}"

mcp_config: ContextBankConfig = ContextBankConfig.from_env()
"""
ContextBankConfig: Server configuration, read from the environment when this module is imported.
The package `__init__` loads `.env` before importing this module.
"""


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, object]]:
    """
    Async context manager for the FastMCP server application lifespan.

    Yields the shared, immutable configuration to tools through the lifespan context. Onyx
    clients are created per request, so there is nothing to clean up on shutdown.

    Args:
        server (FastMCP): The FastMCP server instance being managed.

    Yields:
        dict[str, object]: {"config": ContextBankConfig}
    """
    _LOGGER.info(
        f"[context_bank_server:app_lifespan] MCP server '{server.name}' starting up | onyx_api_base={mcp_config.onyx_api_base} | auth={'bearer' if mcp_config.onyx_api_key else 'none'}"
    )
    try:
        yield {"config": mcp_config}
    finally:
        _LOGGER.info(
            f"[context_bank_server:app_lifespan] MCP server '{server.name}' shutting down"
        )


mcp_server = FastMCP(
    "context-bank", host=mcp_config.host, port=mcp_config.port, lifespan=app_lifespan
)
"""
FastMCP: The server instance exposing the Context Bank tools and the /health endpoint.
"""


@mcp_server.custom_route("/health", methods=["GET"])  # type: ignore[misc]
async def health_check(request: Request) -> JSONResponse:
    """
    Liveness/readiness probe for the HTTP transports.

    Returns:
        JSONResponse: HTTP 200 with body {"status": "ok"}.
    """
    _LOGGER.debug("[context_bank_server:health_check] Health check requested")
    return JSONResponse({"status": "ok"})


def _text_result(*texts: str) -> list[TextContent]:
    return [TextContent(type="text", text=text) for text in texts]


def _get_config(context: Context) -> ContextBankConfig:
    config: ContextBankConfig = context.request_context.lifespan_context["config"]
    return config


@mcp_server.tool(name="create-chat-session")
async def create_chat_session(
    context: Context,
    persona_id: int | None = None,
    description: str | None = None,
) -> list[TextContent]:
    """
    Create a chat session for querying the AtherOS's knowledge base.

    The returned text contains the new chat session id. Pass that id unchanged as
    `chat_session_id` to `query-atheros`.

    Parameters:
        persona_id (int, optional): Persona (assistant profile) id. Default is 0.
        description (str, optional): Description of the chat session. Default is an empty string.

    Returns:
        A single text block. On failure the text explains whether the request failed or the
        response carried no chat session id.
    """
    _LOGGER.info(
        f"[context_bank_server:create_chat_session] Creating chat session | persona_id={persona_id}"
    )
    try:
        async with OnyxClient.from_config(_get_config(context), _LOGGER) as client:
            result = await client.create_chat_session(persona_id, description)

        if not result.ok:
            _LOGGER.warning(
                f"[context_bank_server:create_chat_session] Request failed ({result.status.value}): {result.error}"
            )
            return _text_result(CREATE_SESSION_FAILED_TEXT)

        chat_session_id = (
            result.data.get("chat_session_id")
            if isinstance(result.data, dict)
            else None
        )
        if not chat_session_id:
            _LOGGER.warning(
                "[context_bank_server:create_chat_session] Response has no chat_session_id"
            )
            return _text_result(MISSING_SESSION_ID_TEXT)

        _LOGGER.info(
            f"[context_bank_server:create_chat_session] Created chat session {chat_session_id}"
        )
        return _text_result(
            f"Chat session created for querying the {KNOWLEDGE_BASE_NAME}. Chat session id: {chat_session_id}"
        )
    except Exception as exc:
        _LOGGER.exception(
            f"[context_bank_server:create_chat_session] Unexpected error: {exc}"
        )
        return _text_result(CREATE_SESSION_FAILED_TEXT)


@mcp_server.tool(name="query-atheros")
async def query_atheros(
    context: Context,
    chat_session_id: str,
    message: str,
    parent_message_id: int | None = None,
) -> list[TextContent]:
    """
    Send a message to the chat session for querying the AtherOS's knowledge base.

    Parameters:
        chat_session_id (str): Chat session id returned by `create-chat-session`.
        message (str): Message to send for querying the knowledge base.
        parent_message_id (int, optional): Parent message id if the message is a reply to a
            previous message. Omit it for a new question.

    Returns:
        A single text block with the message id, the rephrased query (if any), the answer and
        its top source with a relevance score and link.
    """
    _LOGGER.info(
        f"[context_bank_server:query_atheros] Sending message | chat_session_id={chat_session_id} | message_len={len(message)} | parent_message_id={parent_message_id}"
    )
    failed_text = f"Failed to send message {message} to chat session {chat_session_id}"
    try:
        async with OnyxClient.from_config(_get_config(context), _LOGGER) as client:
            result = await client.send_message(
                chat_session_id, message, parent_message_id
            )

        if not result.ok:
            _LOGGER.warning(
                f"[context_bank_server:query_atheros] Request failed ({result.status.value}): {result.error}"
            )
            return _text_result(failed_text)

        response = result.data if isinstance(result.data, dict) else {}
        answer = response.get("message")
        if not answer or not isinstance(answer, str):
            _LOGGER.warning(
                f"[context_bank_server:query_atheros] Response for chat session {chat_session_id} has no message"
            )
            return _text_result(
                f"Failed to get message response from chat session {chat_session_id}"
            )

        _LOGGER.debug(
            f"[context_bank_server:query_atheros] Received message {response.get('message_id')} | response_len={len(answer)}"
        )
        return _text_result(format_send_message_response(response))
    except Exception as exc:
        _LOGGER.exception(f"[context_bank_server:query_atheros] Unexpected error: {exc}")
        return _text_result(failed_text)


@mcp_server.tool(name="document-search")
async def document_search(context: Context, message: str) -> list[TextContent]:
    """
    Search for documents in the AtherOS's knowledge base.

    Runs a semantic search and returns up to three documents.

    Parameters:
        message (str): Message to search for.

    Returns:
        One text block per document, holding its content followed by its link. When nothing
        matches, a single block saying no documents were found.
    """
    _LOGGER.info(
        f"[context_bank_server:document_search] Searching documents | message_len={len(message)}"
    )
    try:
        async with OnyxClient.from_config(_get_config(context), _LOGGER) as client:
            result = await client.document_search(message)

        if not result.ok:
            _LOGGER.warning(
                f"[context_bank_server:document_search] Request failed ({result.status.value}): {result.error}"
            )
            return _text_result(SEARCH_FAILED_TEXT)

        top_documents = (
            result.data.get("top_documents") if isinstance(result.data, dict) else None
        )
        # Entries that are not document objects are skipped
        documents = (
            [doc for doc in top_documents if isinstance(doc, dict)]
            if isinstance(top_documents, list)
            else []
        )
        if not documents:
            _LOGGER.info("[context_bank_server:document_search] No documents found")
            return _text_result(NO_DOCUMENTS_FOUND_TEXT)

        _LOGGER.info(
            f"[context_bank_server:document_search] Found {len(documents)} documents"
        )
        return _text_result(*(format_search_document(doc) for doc in documents))
    except Exception as exc:
        _LOGGER.exception(
            f"[context_bank_server:document_search] Unexpected error: {exc}"
        )
        return _text_result(SEARCH_FAILED_TEXT)


__all__ = ["mcp_server", "mcp_config"]
