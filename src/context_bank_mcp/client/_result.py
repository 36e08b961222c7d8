"""Outcome of a single Onyx API call."""

import enum
from dataclasses import dataclass
from typing import Any


class OnyxResultStatus(enum.Enum):
    """How an Onyx API call ended."""

    SUCCESS = "success"
    """The response was received and decoded."""

    TRANSPORT_ERROR = "transport_error"
    """The request failed: network or DNS error, timeout, or a non-2xx status."""

    DECODE_ERROR = "decode_error"
    """A response arrived but its body was empty or could not be decoded."""


@dataclass(frozen=True)
class OnyxResult:
    """Result of `OnyxClient.post`.

    Use the class methods `success`, `transport_error` and `decode_error` for construction.

    Attributes:
        status: How the call ended.
        data: The decoded body. Only set when `status` is SUCCESS.
        error: A human-readable description of the failure. None on success.
    """

    status: OnyxResultStatus
    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is OnyxResultStatus.SUCCESS

    @classmethod
    def success(cls, data: Any) -> "OnyxResult":
        return cls(OnyxResultStatus.SUCCESS, data=data)

    @classmethod
    def transport_error(cls, error: str) -> "OnyxResult":
        return cls(OnyxResultStatus.TRANSPORT_ERROR, error=error)

    @classmethod
    def decode_error(cls, error: str) -> "OnyxResult":
        return cls(OnyxResultStatus.DECODE_ERROR, error=error)
