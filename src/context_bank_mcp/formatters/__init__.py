"""Formatters that render Onyx responses as tool result text."""

from ._chat import (
    NO_LINK_AVAILABLE,
    NO_MESSAGE_CONTENT,
    SECTION_SEPARATOR,
    UNKNOWN,
    format_relevance,
    format_search_document,
    format_send_message_response,
    format_sources,
)

__all__ = [
    "NO_LINK_AVAILABLE",
    "NO_MESSAGE_CONTENT",
    "SECTION_SEPARATOR",
    "UNKNOWN",
    "format_relevance",
    "format_search_document",
    "format_send_message_response",
    "format_sources",
]
