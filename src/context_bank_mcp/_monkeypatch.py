"""
Uvicorn patching for structured logging of unhandled ASGI exceptions.

When the server runs on the `sse` or `streamable-http` transport, FastMCP serves it through Uvicorn.
Some Uvicorn versions swallow exceptions raised inside the ASGI application. Calling
`monkeypatch_uvicorn_exception_handling()` once at startup wraps the application so that every
unhandled exception is written:

    1. as a single JSON line directly on stderr, bypassing the logging module, and
    2. through a dedicated `json_asgi_errors` logger formatted by python-json-logger,

before being re-raised unchanged.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger import json as jsonlogger
from uvicorn.protocols.http.httptools_impl import RequestResponseCycle

_LOGGER = logging.getLogger(__name__)

_JSON_LOGGER_NAME = "json_asgi_errors"


def _setup_json_logging() -> logging.Logger:
    """
    Configure the JSON logger used for ASGI exceptions.

    Returns:
        logging.Logger: The `json_asgi_errors` logger with a stderr JsonFormatter handler,
            set to ERROR level with propagation disabled to avoid duplicate entries.
    """
    json_logger = logging.getLogger(_JSON_LOGGER_NAME)

    if not json_logger.handlers:
        json_handler = logging.StreamHandler(sys.stderr)
        json_handler.setFormatter(
            jsonlogger.JsonFormatter(
                fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S.%fZ",
            )
        )
        json_logger.addHandler(json_handler)
        json_logger.setLevel(logging.ERROR)

    json_logger.propagate = False
    return json_logger


# Created on first use rather than at import time
_json_logger: logging.Logger | None = None


def _get_json_logger() -> logging.Logger:
    global _json_logger
    if _json_logger is None:
        _json_logger = _setup_json_logging()
    return _json_logger


def _describe_exception(exc: BaseException) -> dict[str, Any]:
    """Build the structured fields shared by both log records."""
    exc_type = type(exc)
    return {
        "exception_type": exc_type.__name__,
        "exception_module": exc_type.__module__,
        "exception_message": str(exc),
        "stack_trace": "".join(
            traceback.format_exception(exc_type, exc, exc.__traceback__)
        ),
    }


def monkeypatch_uvicorn_exception_handling() -> None:
    """
    Monkey-patch Uvicorn's RequestResponseCycle so unhandled ASGI exceptions are logged.

    The original exception is always re-raised, so Uvicorn's own error response behavior is unchanged.
    Call this exactly once at process startup.
    """
    _LOGGER.warning(
        "Monkey-patching Uvicorn's RequestResponseCycle to log unhandled ASGI exceptions."
    )
    orig_run_asgi = RequestResponseCycle.run_asgi

    async def my_run_asgi(self: RequestResponseCycle, app: Any) -> None:
        async def wrapped_app(*args: Any) -> Any:
            try:
                return await app(*args)
            except Exception as e:
                details = _describe_exception(e)
                summary = f"{details['exception_type']}: {details['exception_message']}"

                stderr_log = {
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "severity": "ERROR",
                    "message": f"Unhandled exception in ASGI application: {summary}",
                    "exception": details,
                }
                print(json.dumps(stderr_log), file=sys.stderr, flush=True)

                try:
                    _get_json_logger().error(
                        f"Unhandled exception in ASGI application: {summary}",
                        extra={"severity": "ERROR", **details},
                        exc_info=(type(e), e, e.__traceback__),
                    )
                except Exception as json_err:
                    # Never let a logging failure mask the original exception
                    print(f"Python JSON Logger failed: {json_err}", file=sys.stderr)

                raise

        await orig_run_asgi(self, wrapped_app)

    RequestResponseCycle.run_asgi = my_run_asgi  # type: ignore[method-assign]
