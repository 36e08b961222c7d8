"""
Logging and global exception handling utilities for the Context Bank MCP server.

This module provides functions to:
- Resolve the log level from `LOG_LEVEL` (or `PYTHONLOGLEVEL`) (`resolve_log_level`).
- Set up root logger configuration early in process startup (`setup_logging`).
- Ensure all unhandled synchronous and asynchronous exceptions are logged (`setup_global_exception_logging`).

Call `setup_logging()` before importing the server modules in your main entrypoint so that all loggers are configured correctly.
Call `setup_global_exception_logging()` once at process startup.
"""

import asyncio
import logging
import os
import sys
from collections.abc import Mapping
from types import TracebackType
from typing import Any

_DEFAULT_LOG_LEVEL = "INFO"

# Level names accepted in LOG_LEVEL, mapped to logging level names.
_LOG_LEVEL_ALIASES: dict[str, str] = {
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "warning": "WARNING",
    "error": "ERROR",
    "critical": "CRITICAL",
}


def resolve_log_level(environ: Mapping[str, str] | None = None) -> str:
    """
    Resolve the logging level name from the environment.

    `LOG_LEVEL` takes precedence over `PYTHONLOGLEVEL`. Values are case-insensitive and
    `warn` is accepted as an alias for `WARNING`. Unknown values fall back to `INFO`.

    Args:
        environ (Mapping[str, str] | None): Environment to read. Defaults to `os.environ`.

    Returns:
        str: A logging level name such as "DEBUG" or "INFO".
    """
    env = os.environ if environ is None else environ
    raw = env.get("LOG_LEVEL") or env.get("PYTHONLOGLEVEL") or _DEFAULT_LOG_LEVEL
    return _LOG_LEVEL_ALIASES.get(raw.strip().lower(), _DEFAULT_LOG_LEVEL)


def setup_logging(level: str | None = None) -> None:
    """
    Set up logging configuration for the application.

    Configures the root logger on stderr, so that the stdio MCP transport is never polluted by log output.

    Args:
        level (str | None): Explicit level name. If None, the level is resolved with `resolve_log_level()`.
    """
    logging.basicConfig(
        level=level or resolve_log_level(),
        format="[%(asctime)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
        force=True,  # Ensure we override any existing logging configuration
    )


# Idempotency guard for global exception logging setup
_EXC_LOGGING_INSTALLED = False


def setup_global_exception_logging() -> None:
    """
    Set up global logging for all unhandled exceptions (synchronous and asynchronous) in the process.

    This function ensures that:
        - Uncaught exceptions in synchronous code are logged using the root logger.
        - Uncaught exceptions in asyncio event loops are logged, including loops created later by libraries
          (`asyncio.new_event_loop` is patched to install the handler on every new loop).
        - The handler is also set on the current event loop, if one exists.

    Calling it more than once is a no-op.
    """
    global _EXC_LOGGING_INSTALLED
    if _EXC_LOGGING_INSTALLED:
        return
    _EXC_LOGGING_INSTALLED = True

    def _log_unhandled_exception(
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: TracebackType | None,
    ) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            return
        logging.error(
            "UNHANDLED EXCEPTION", exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = _log_unhandled_exception

    def _asyncio_exception_handler(
        loop: asyncio.AbstractEventLoop, context: dict[str, Any]
    ) -> None:
        exception = context.get("exception")
        logging.error(
            f"UNHANDLED ASYNC EXCEPTION: {context.get('message')}",
            exc_info=(
                (type(exception), exception, exception.__traceback__)
                if exception
                else None
            ),
        )

    _orig_new_event_loop = asyncio.new_event_loop

    def _patched_new_event_loop(*args: Any, **kwargs: Any) -> asyncio.AbstractEventLoop:
        loop = _orig_new_event_loop(*args, **kwargs)
        loop.set_exception_handler(_asyncio_exception_handler)
        return loop

    asyncio.new_event_loop = _patched_new_event_loop

    try:
        asyncio.get_event_loop().set_exception_handler(_asyncio_exception_handler)
    except RuntimeError:
        # No event loop yet; the handler is installed when one is created
        pass
