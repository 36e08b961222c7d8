from context_bank_mcp.client import (
    build_create_chat_session_request,
    build_document_search_request,
    build_send_message_request,
)
from context_bank_mcp.client import _requests


def test_create_chat_session_defaults():
    assert build_create_chat_session_request() == {"persona_id": 0, "description": ""}


def test_create_chat_session_explicit_values():
    assert build_create_chat_session_request(5, "notes") == {
        "persona_id": 5,
        "description": "notes",
    }


def test_create_chat_session_keeps_falsy_explicit_values():
    assert build_create_chat_session_request(0, "") == {
        "persona_id": 0,
        "description": "",
    }


def test_send_message_request_shape():
    assert build_send_message_request("abc", "hi") == {
        "alternate_assistant_id": 0,
        "chat_session_id": "abc",
        "message": "hi",
        "prompt_id": 0,
        "search_doc_ids": None,
        "file_descriptors": [],
        "regenerate": False,
        "retrieval_options": {
            "run_search": "auto",
            "real_time": True,
            "filters": {
                "source_type": None,
                "document_set": None,
                "time_cutoff": None,
                "tags": [],
            },
        },
        "prompt_override": None,
        "llm_override": {"model_provider": "Default", "model_version": "gpt-4o"},
        "use_agentic_search": False,
        "parent_message_id": None,
    }


def test_send_message_request_parent_message_id():
    assert build_send_message_request("abc", "hi", 42)["parent_message_id"] == 42


def test_send_message_requests_do_not_share_nested_state():
    first = build_send_message_request("abc", "hi")
    first["retrieval_options"]["filters"]["tags"].append("mutated")
    first["file_descriptors"].append("mutated")

    second = build_send_message_request("abc", "hi")
    assert second["retrieval_options"]["filters"]["tags"] == []
    assert second["file_descriptors"] == []


def test_document_search_request_shape():
    assert build_document_search_request("foo") == {
        "message": "foo",
        "search_type": "semantic",
        "retrieval_options": {
            "enable_auto_detect_filters": False,
            "offset": 0,
            "limit": 3,
            "dedupe_docs": True,
        },
        "evaluation_type": "skip",
        "chunks_above": 1,
        "chunks_below": 1,
        "full_doc": False,
    }


def test_endpoint_paths():
    assert _requests.CREATE_CHAT_SESSION_PATH == "/api/chat/create-chat-session"
    assert _requests.SEND_MESSAGE_PATH == "/api/chat/send-message"
    assert _requests.DOCUMENT_SEARCH_PATH == "/api/chat/document-search"
