"""
Context Bank MCP configuration.

Configuration is read once at startup from the process environment into an immutable
`ContextBankConfig`. The `context_bank_server` package loads a `.env` file (python-dotenv)
before this happens, so values may come from either source; real environment variables win.

Environment Variables:
    ONYX_API_BASE: Base URL of the Onyx deployment. Defaults to http://localhost:3000.
        Must start with http:// or https://. A trailing slash is removed.
    ONYX_API_KEY: Bearer token for the Onyx API. Optional; when unset or empty no
        Authorization header is sent.
    LOG_LEVEL: Log verbosity (debug, info, warn, error, critical). Falls back to
        PYTHONLOGLEVEL, then info.
    CONTEXT_BANK_HOST: Host to bind the HTTP transports to. Defaults to 127.0.0.1.
    CONTEXT_BANK_PORT: Port to bind the HTTP transports to. Falls back to PORT, then 8001.

Sensitive fields are redacted from `repr()` so the config can be logged safely.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from ._exceptions import ConfigurationError
from ._logging import resolve_log_level

__all__ = [
    "ContextBankConfig",
    "DEFAULT_ONYX_API_BASE",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
]

_LOGGER = logging.getLogger(__name__)

DEFAULT_ONYX_API_BASE = "http://localhost:3000"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8001

_REDACTED = "[REDACTED]"


@dataclass(frozen=True)
class ContextBankConfig:
    """Immutable server configuration.

    Attributes:
        onyx_api_base: Onyx base URL without a trailing slash.
        onyx_api_key: Bearer token, or None when no authentication is configured.
        log_level: Logging level name, e.g. "INFO".
        host: Bind host for the HTTP transports.
        port: Bind port for the HTTP transports.
    """

    onyx_api_base: str = DEFAULT_ONYX_API_BASE
    onyx_api_key: str | None = None
    log_level: str = "INFO"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def __repr__(self) -> str:
        api_key = _REDACTED if self.onyx_api_key else None
        return (
            f"ContextBankConfig(onyx_api_base={self.onyx_api_base!r}, "
            f"onyx_api_key={api_key!r}, log_level={self.log_level!r}, "
            f"host={self.host!r}, port={self.port!r})"
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ContextBankConfig":
        """
        Build a configuration from environment variables.

        Args:
            environ (Mapping[str, str] | None): Environment to read. Defaults to `os.environ`.

        Returns:
            ContextBankConfig: The validated configuration.

        Raises:
            ConfigurationError: If ONYX_API_BASE is not an http(s) URL or the port is not a valid integer.
        """
        env = os.environ if environ is None else environ

        onyx_api_base = (env.get("ONYX_API_BASE") or DEFAULT_ONYX_API_BASE).strip()
        if not onyx_api_base.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"ONYX_API_BASE must start with http:// or https://, got {onyx_api_base!r}"
            )
        onyx_api_base = onyx_api_base.rstrip("/")

        raw_port = env.get("CONTEXT_BANK_PORT") or env.get("PORT") or str(DEFAULT_PORT)
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigurationError(
                f"CONTEXT_BANK_PORT must be an integer, got {raw_port!r}"
            ) from None
        if not 0 < port < 65536:
            raise ConfigurationError(
                f"CONTEXT_BANK_PORT must be between 1 and 65535, got {port}"
            )

        config = cls(
            onyx_api_base=onyx_api_base,
            onyx_api_key=env.get("ONYX_API_KEY") or None,
            log_level=resolve_log_level(env),
            host=env.get("CONTEXT_BANK_HOST") or DEFAULT_HOST,
            port=port,
        )
        _LOGGER.debug(f"[config:from_env] Loaded configuration: {config!r}")
        return config
