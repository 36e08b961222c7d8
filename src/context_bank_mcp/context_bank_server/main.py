"""
CLI entrypoint for the Context Bank MCP server.

This module sets up logging, global exception handling and Uvicorn exception patching before
starting the server. It provides a command-line interface to launch the server with a specified
transport (stdio, sse, or streamable-http). The `.env` file is loaded by the package on import.
"""

from .._logging import setup_global_exception_logging, setup_logging

# The package __init__ has already built the server; these hooks only need to precede mcp_server.run()
setup_logging()
setup_global_exception_logging()

from .._monkeypatch import monkeypatch_uvicorn_exception_handling  # noqa: E402

monkeypatch_uvicorn_exception_handling()

import logging  # noqa: E402
from typing import Literal  # noqa: E402

from ._mcp import mcp_config, mcp_server  # noqa: E402

_LOGGER = logging.getLogger(__name__)


def run_server(
    transport: Literal["stdio", "sse", "streamable-http"],
) -> None:
    """
    Start the MCP server with the specified transport.

    Args:
        transport (str): The transport type ('stdio', 'sse', or 'streamable-http')
    """
    try:
        _LOGGER.warning(
            f"Starting MCP server '{mcp_server.name}' with transport={transport} (host={mcp_config.host}, port={mcp_config.port})"
        )
        mcp_server.run(transport=transport)
    finally:
        _LOGGER.info(f"MCP server '{mcp_server.name}' stopped.")


def main() -> None:
    """
    Command-line entry point for the Context Bank MCP server.

    Arguments:
        -t, --transport: Transport type for the MCP server ('stdio', 'sse', or 'streamable-http'). Default: 'stdio'.
    """
    import argparse

    parser = argparse.ArgumentParser(description="Start the Context Bank MCP server.")
    parser.add_argument(
        "-t",
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport type for the MCP server (stdio, sse, or streamable-http). Default: stdio",
    )
    args = parser.parse_args()
    _LOGGER.info(f"CLI args: {vars(args)}")
    run_server(args.transport)


if __name__ == "__main__":
    main()
