"""Text formatters for Onyx chat and search responses."""

import math
from collections.abc import Mapping
from typing import Any

SECTION_SEPARATOR = "---"
NO_MESSAGE_CONTENT = "No message content"
UNKNOWN = "Unknown"
NO_LINK_AVAILABLE = "No link available"


def format_relevance(score: Any) -> str:
    """
    Format a document relevance score with two decimals.

    Args:
        score (Any): The document score. Any finite int or float is accepted; the range is unconstrained.

    Returns:
        str: e.g. "0.87", or "Unknown" if the score is missing, not numeric, or not finite.
    """
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return UNKNOWN
    if not math.isfinite(score):
        return UNKNOWN
    return f"{score:.2f}"


def format_sources(context_docs: Mapping[str, Any] | None) -> str:
    """
    Render the Sources block for the first context document.

    Only the top document is cited. Returns an empty string when there are no context documents.
    """
    if not isinstance(context_docs, Mapping):
        return ""
    top_documents = context_docs.get("top_documents")
    if not isinstance(top_documents, list) or not top_documents:
        return ""
    if not isinstance(top_documents[0], Mapping):
        return ""

    top_doc = top_documents[0]
    docs_info = "\n".join(
        [
            f"Top source: {top_doc.get('semantic_identifier') or UNKNOWN}",
            f"Relevance: {format_relevance(top_doc.get('score'))}",
            f"Link: {top_doc.get('link') or NO_LINK_AVAILABLE}",
        ]
    )
    return f"Sources:\n{docs_info}"


def format_send_message_response(response: Mapping[str, Any]) -> str:
    """
    Render a send-message response as a multi-section text block.

    Sections, in order, each dropped when empty:
        - "Message ID: <id>"
        - "Query: <rephrased query>" (only when the query was rephrased)
        - "---", the message text (or "No message content"), "---"
        - "Sources:" with the top source, its relevance and its link

    Args:
        response (Mapping[str, Any]): A decoded `SendMessageResponse`.

    Returns:
        str: The newline-joined sections. The output depends only on `response`.

    Example:
        >>> print(format_send_message_response({"message_id": 1, "message": "hello"}))
        Message ID: 1
        ---
        hello
        ---
    """
    message_id = response.get("message_id")
    rephrased_query = response.get("rephrased_query")

    blocks = [
        f"Message ID: {UNKNOWN if message_id is None else message_id}",
        f"Query: {rephrased_query}" if rephrased_query else "",
        SECTION_SEPARATOR,
        response.get("message") or NO_MESSAGE_CONTENT,
        SECTION_SEPARATOR,
        format_sources(response.get("context_docs")),
    ]
    return "\n".join(block for block in blocks if block)


def format_search_document(document: Mapping[str, Any]) -> str:
    """Render a search document as its content followed by its link on the next line."""
    return f"{document.get('content') or ''}\n{document.get('link') or ''}"
