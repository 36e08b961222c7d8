"""
Onyx API client for the Context Bank MCP server.

Exports:
    - OnyxClient: Async aiohttp client for the Onyx chat endpoints.
    - OnyxResult, OnyxResultStatus: Outcome of a single API call.
    - parse_response_body, STREAM_SENTINEL: Decoding of plain and sentinel-anchored stream bodies.
    - build_*_request: Payload builders for each endpoint.
    - Wire TypedDicts describing request and response shapes.
"""

from ._client import OnyxClient
from ._parser import STREAM_SENTINEL, parse_response_body
from ._requests import (
    CREATE_CHAT_SESSION_PATH,
    DOCUMENT_SEARCH_PATH,
    SEND_MESSAGE_PATH,
    build_create_chat_session_request,
    build_document_search_request,
    build_send_message_request,
)
from ._result import OnyxResult, OnyxResultStatus
from ._types import (
    ContextDocs,
    CreateChatSessionResponse,
    DocumentSearchResponse,
    SearchDocument,
    SendMessageRequest,
    SendMessageResponse,
)

__all__ = [
    "OnyxClient",
    "OnyxResult",
    "OnyxResultStatus",
    "STREAM_SENTINEL",
    "parse_response_body",
    "CREATE_CHAT_SESSION_PATH",
    "SEND_MESSAGE_PATH",
    "DOCUMENT_SEARCH_PATH",
    "build_create_chat_session_request",
    "build_send_message_request",
    "build_document_search_request",
    "ContextDocs",
    "CreateChatSessionResponse",
    "DocumentSearchResponse",
    "SearchDocument",
    "SendMessageRequest",
    "SendMessageResponse",
]
