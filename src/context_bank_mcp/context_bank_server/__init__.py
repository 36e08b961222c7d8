"""
context_bank_mcp.context_bank_server package.

Provides access to the MCP server instance (`mcp_server`) and its configuration (`mcp_config`).
All MCP tool definitions live in the internal module `_mcp.py`; the CLI entrypoint is
`context_bank_mcp.context_bank_server.main:main`.

A `.env` file in the working directory is loaded before the configuration is read. Variables
already set in the process environment take precedence.

Exports:
    - mcp_server: The FastMCP server instance with all registered tools.
    - mcp_config: The ContextBankConfig loaded from the environment.

Usage:
    from context_bank_mcp.context_bank_server.main import run_server
    run_server("stdio")
"""

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))

from ._mcp import mcp_config, mcp_server  # noqa: E402

__all__ = ["mcp_server", "mcp_config"]
