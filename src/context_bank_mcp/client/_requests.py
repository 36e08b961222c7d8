"""
Request payload builders for the Onyx chat API.

Each endpoint has one builder that takes only the fields a caller can meaningfully choose and
fills everything else from the named defaults below. Builders return a freshly allocated payload
on every call, so payloads are never shared between requests.
"""

from ._types import (
    CreateChatSessionRequest,
    DocumentSearchRequest,
    SendMessageRequest,
)

CREATE_CHAT_SESSION_PATH = "/api/chat/create-chat-session"
SEND_MESSAGE_PATH = "/api/chat/send-message"
DOCUMENT_SEARCH_PATH = "/api/chat/document-search"

# create-chat-session
DEFAULT_PERSONA_ID = 0
DEFAULT_SESSION_DESCRIPTION = ""

# send-message
DEFAULT_ALTERNATE_ASSISTANT_ID = 0
DEFAULT_PROMPT_ID = 0
DEFAULT_RUN_SEARCH = "auto"
DEFAULT_REAL_TIME = True
DEFAULT_MODEL_PROVIDER = "Default"
DEFAULT_MODEL_VERSION = "gpt-4o"
DEFAULT_USE_AGENTIC_SEARCH = False

# document-search
DEFAULT_SEARCH_TYPE = "semantic"
DEFAULT_SEARCH_LIMIT = 3
DEFAULT_SEARCH_OFFSET = 0
DEFAULT_DEDUPE_DOCS = True
DEFAULT_ENABLE_AUTO_DETECT_FILTERS = False
DEFAULT_EVALUATION_TYPE = "skip"
DEFAULT_CHUNKS_ABOVE = 1
DEFAULT_CHUNKS_BELOW = 1
DEFAULT_FULL_DOC = False


def build_create_chat_session_request(
    persona_id: int | None = None, description: str | None = None
) -> CreateChatSessionRequest:
    """Build the create-chat-session payload, defaulting persona 0 and an empty description."""
    return {
        "persona_id": DEFAULT_PERSONA_ID if persona_id is None else persona_id,
        "description": DEFAULT_SESSION_DESCRIPTION if description is None else description,
    }


def build_send_message_request(
    chat_session_id: str,
    message: str,
    parent_message_id: int | None = None,
) -> SendMessageRequest:
    """
    Build the send-message payload.

    Args:
        chat_session_id (str): Session id returned by create-chat-session, passed through unchanged.
        message (str): The user message.
        parent_message_id (int | None): Message being replied to, or None for a new thread.

    Returns:
        SendMessageRequest: The payload, with search filters left open and the default LLM override.
    """
    return {
        "alternate_assistant_id": DEFAULT_ALTERNATE_ASSISTANT_ID,
        "chat_session_id": chat_session_id,
        "message": message,
        "prompt_id": DEFAULT_PROMPT_ID,
        "search_doc_ids": None,
        "file_descriptors": [],
        "regenerate": False,
        "retrieval_options": {
            "run_search": DEFAULT_RUN_SEARCH,
            "real_time": DEFAULT_REAL_TIME,
            "filters": {
                "source_type": None,
                "document_set": None,
                "time_cutoff": None,
                "tags": [],
            },
        },
        "prompt_override": None,
        "llm_override": {
            "model_provider": DEFAULT_MODEL_PROVIDER,
            "model_version": DEFAULT_MODEL_VERSION,
        },
        "use_agentic_search": DEFAULT_USE_AGENTIC_SEARCH,
        "parent_message_id": parent_message_id,
    }


def build_document_search_request(message: str) -> DocumentSearchRequest:
    """Build the document-search payload for a semantic search returning the top 3 documents."""
    return {
        "message": message,
        "search_type": DEFAULT_SEARCH_TYPE,
        "retrieval_options": {
            "enable_auto_detect_filters": DEFAULT_ENABLE_AUTO_DETECT_FILTERS,
            "offset": DEFAULT_SEARCH_OFFSET,
            "limit": DEFAULT_SEARCH_LIMIT,
            "dedupe_docs": DEFAULT_DEDUPE_DOCS,
        },
        "evaluation_type": DEFAULT_EVALUATION_TYPE,
        "chunks_above": DEFAULT_CHUNKS_ABOVE,
        "chunks_below": DEFAULT_CHUNKS_BELOW,
        "full_doc": DEFAULT_FULL_DOC,
    }
