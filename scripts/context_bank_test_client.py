#!/usr/bin/env python3
"""
Async test client for the Context Bank MCP server.

- Connects to the server via stdio (default), streamable-http, or SSE.
- Lists available tools (create-chat-session, query-atheros, document-search).
- Creates a chat session, asks a question in it, and runs a document search.
- Prints every tool result for verification.

Requires: mcp package (native client) and a reachable Onyx deployment configured on the server.

Usage examples:
    python scripts/context_bank_test_client.py --transport stdio --stdio-cmd "uv run context-bank-mcp-server --transport stdio"
    python scripts/context_bank_test_client.py --transport streamable-http --url http://localhost:8001/mcp
    python scripts/context_bank_test_client.py --transport sse --url http://localhost:8001/sse --query "How do I deploy?"

See --help for all options.
"""

import argparse
import asyncio
import logging
import re
import shlex
import sys

from mcp import ClientSession, StdioServerParameters
from mcp.client.sse import sse_client
from mcp.client.stdio import stdio_client
from mcp.client.streamable_http import streamablehttp_client

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
_LOGGER = logging.getLogger(__name__)

EXPECTED_TOOLS = {"create-chat-session", "query-atheros", "document-search"}

_SESSION_ID_PATTERN = re.compile(r"Chat session id: (\S+)")


def parse_args():
    """
    Parse command-line arguments for the Context Bank test client.

    Returns:
        argparse.Namespace: Parsed arguments with fields:
            - transport: Transport type ('stdio', 'streamable-http', or 'sse')
            - url: HTTP server URL (auto-detected if not specified)
            - stdio_cmd: Command to launch stdio server
            - env: List of environment variable strings (KEY=VALUE)
            - query: Question to send with query-atheros
            - search: Search text for document-search
            - token: Optional authorization token for HTTP transports
    """
    parser = argparse.ArgumentParser(
        description="Async Context Bank MCP test client (stdio, streamable-http, or SSE)"
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "streamable-http", "sse"],
        default="stdio",
        help="Transport type (stdio, streamable-http, or sse)",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="HTTP server URL (auto-detected based on transport if not specified)",
    )
    parser.add_argument(
        "--stdio-cmd",
        default="uv run context-bank-mcp-server --transport stdio",
        help="Stdio server command (default: uv run context-bank-mcp-server --transport stdio)",
    )
    parser.add_argument(
        "--env",
        action="append",
        default=[],
        help="Environment variable for stdio transport, format KEY=VALUE. Can be specified multiple times.",
    )
    parser.add_argument(
        "--query",
        default="What is AtherOS?",
        help="Question to send with the query-atheros tool.",
    )
    parser.add_argument(
        "--search",
        default="AtherOS",
        help="Search text for the document-search tool.",
    )
    parser.add_argument(
        "--token",
        default=None,
        help="Optional authorization token for HTTP transports (Bearer token)",
    )
    return parser.parse_args()


def _parse_env(items):
    env_dict = {}
    for item in items:
        if "=" not in item:
            raise ValueError(f"Invalid --env entry: {item}. Must be KEY=VALUE.")
        k, v = item.split("=", 1)
        env_dict[k] = v
    return env_dict


def _print_result(tool_name, result):
    print(f"\n{tool_name} result:")
    for block in result.content:
        print(getattr(block, "text", block))


async def exercise_tools(session, args):
    """
    Run each Context Bank tool once against an initialized session.

    Exits with status 1 if a tool is missing and 3 if a tool call fails.
    """
    tools_result = await session.list_tools()
    tool_names = {t.name for t in tools_result.tools}
    _LOGGER.info(f"Available tools: {sorted(tool_names)}")

    missing = EXPECTED_TOOLS - tool_names
    if missing:
        _LOGGER.error(f"Tools not found on server: {sorted(missing)}")
        print(f"Tools not found on server: {sorted(missing)}", file=sys.stderr)
        sys.exit(1)

    try:
        result = await session.call_tool("create-chat-session", arguments={})
        _print_result("create-chat-session", result)

        text = result.content[0].text if result.content else ""
        match = _SESSION_ID_PATTERN.search(text)
        if match:
            chat_session_id = match.group(1)
            _LOGGER.info(f"Calling query-atheros in chat session {chat_session_id}")
            result = await session.call_tool(
                "query-atheros",
                arguments={"chat_session_id": chat_session_id, "message": args.query},
            )
            _print_result("query-atheros", result)
        else:
            _LOGGER.warning("No chat session id returned; skipping query-atheros")

        _LOGGER.info(f"Calling document-search with {args.search!r}")
        result = await session.call_tool(
            "document-search", arguments={"message": args.search}
        )
        _print_result("document-search", result)
    except Exception as e:
        _LOGGER.error(f"Error calling tools: {e}")
        print(f"Error calling tools: {e}", file=sys.stderr)
        sys.exit(3)


async def main():
    """
    Connect to the Context Bank server with the chosen transport and exercise its tools.

    Raises:
        ValueError: If invalid environment variables or stdio command provided.
        SystemExit: On tool discovery or tool call failures.
    """
    args = parse_args()

    # Auto-detect URL based on transport if not specified
    if args.url is None:
        if args.transport == "sse":
            args.url = "http://localhost:8001/sse"
        elif args.transport == "streamable-http":
            args.url = "http://localhost:8001/mcp"

    _LOGGER.info(f"Connecting to Context Bank server via {args.transport} transport")

    if args.transport == "stdio":
        stdio_tokens = shlex.split(args.stdio_cmd)
        if not stdio_tokens:
            raise ValueError("--stdio-cmd must not be empty")
        env_dict = _parse_env(args.env)

        server_params = StdioServerParameters(
            command=stdio_tokens[0],
            args=stdio_tokens[1:],
            env=env_dict if env_dict else None,
        )
        async with stdio_client(server_params) as (read, write):
            async with ClientSession(read, write) as session:
                await session.initialize()
                await exercise_tools(session, args)
        return

    headers = {"Authorization": f"Bearer {args.token}"} if args.token else None
    _LOGGER.info(f"Server URL: {args.url}")
    if args.transport == "streamable-http":
        async with streamablehttp_client(args.url, headers=headers) as (read, write, _):
            async with ClientSession(read, write) as session:
                await session.initialize()
                await exercise_tools(session, args)
    else:
        async with sse_client(args.url, headers=headers) as (read, write):
            async with ClientSession(read, write) as session:
                await session.initialize()
                await exercise_tools(session, args)


if __name__ == "__main__":
    try:
        asyncio.run(
            asyncio.wait_for(main(), timeout=60)
        )  # 60 seconds for the whole script
    except asyncio.TimeoutError:
        _LOGGER.error("Timed out waiting for main() to complete")
        print("Timed out waiting for main() to complete.", file=sys.stderr)
        sys.exit(5)
    except KeyboardInterrupt:
        _LOGGER.info("Interrupted by user")
        print("Interrupted by user.", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        _LOGGER.error(f"Fatal error in main: {e}")
        print(f"Fatal error in main: {e}", file=sys.stderr)
        sys.exit(10)
