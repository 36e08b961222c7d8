import context_bank_mcp.client as client_pkg


def test_public_api():
    expected = {
        "OnyxClient",
        "OnyxResult",
        "OnyxResultStatus",
        "STREAM_SENTINEL",
        "parse_response_body",
        "build_create_chat_session_request",
        "build_send_message_request",
        "build_document_search_request",
    }
    assert expected <= set(client_pkg.__all__)
    for name in client_pkg.__all__:
        assert hasattr(client_pkg, name)
