"""
Context Bank Model Context Protocol (MCP) server.

This package exposes an Onyx knowledge-base deployment (the AtherOS knowledge
base) to LLM hosts through MCP tools for chat sessions, chat queries and
semantic document search.

Modules:
    - client: Async Onyx API client, request builders and response parsing
    - formatters: Text rendering of Onyx responses for tool results
    - context_bank_server: FastMCP server, tools and CLI entrypoint

To run the server, use the `context-bank-mcp-server` console script or the
`run_server` function from the `context_bank_server` package.
"""

import logging

from ._version import version as __version__

__all__ = ["__version__"]

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())
