"""
Exception hierarchy for the Context Bank MCP server.

All package-specific errors inherit from `McpError` so callers can catch every
server error with a single except clause while still distinguishing the
concrete failure:

    McpError
    ├── ConfigurationError        invalid environment configuration
    └── OnyxClientError           misuse of, or failure inside, the Onyx client
        └── ResponseDecodeError   an Onyx response body could not be decoded

Note that `OnyxClient.post` never raises for transport or decode failures; it
reports them through `OnyxResult`. `ResponseDecodeError` is raised by the
response parser and converted to a result at the client boundary.
"""

__all__ = [
    "McpError",
    "ConfigurationError",
    "OnyxClientError",
    "ResponseDecodeError",
]


class McpError(Exception):
    """Base exception for all Context Bank MCP errors.

    Examples:
        ```python
        try:
            config = ContextBankConfig.from_env()
        except McpError as e:
            logger.error(f"Context Bank setup failed: {e}")
        ```
    """

    pass


class ConfigurationError(McpError):
    """Raised when the server configuration is invalid.

    Typical causes are a malformed `ONYX_API_BASE` URL or a non-integer port.
    The message names the offending environment variable.
    """

    pass


class OnyxClientError(McpError):
    """Raised for Onyx client errors.

    Raised directly when the client is constructed with invalid parameters
    (for example an empty base URL), and used as the base class for response
    decoding errors.
    """

    pass


class ResponseDecodeError(OnyxClientError, ValueError):
    """Raised when an Onyx response body cannot be decoded.

    Inherits from `ValueError` as well, so it can be handled alongside
    `json.JSONDecodeError` by code that treats both as malformed input.
    The underlying decode error, when there is one, is chained as `__cause__`.
    """

    pass
