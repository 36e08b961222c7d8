"""
Decoding of Onyx response bodies.

Most Onyx endpoints return a single JSON document. The send-message endpoint instead writes a
run of JSON objects back to back, with no framing delimiter between them. The only stable anchor
in that stream is the sentinel object `{"agentic_message_ids": []}`, emitted once, after which the
final answer object follows. `parse_response_body` handles both encodings.

This is a targeted workaround for that one stream layout and not a general streaming-JSON parser:
a body with zero or several sentinels is rejected rather than guessed at.
"""

import json
import logging
from typing import Any

from .._exceptions import ResponseDecodeError

_LOGGER = logging.getLogger(__name__)

STREAM_SENTINEL = '{"agentic_message_ids": []}'
"""str: The literal object separating intermediate stream objects from the final answer."""


def parse_response_body(raw_body: str) -> Any:
    """
    Decode an Onyx response body that is either plain JSON or a sentinel-anchored stream.

    Decoding is attempted in two stages:
        1. The whole body is decoded as JSON. If that succeeds the result is returned as-is.
        2. Otherwise the body must contain `STREAM_SENTINEL` exactly once, and the text after it
           is decoded as JSON.

    Args:
        raw_body (str): The raw response text.

    Returns:
        Any: The decoded JSON value.

    Raises:
        ResponseDecodeError: If neither stage yields valid JSON, including when the sentinel is
            missing, appears more than once, or is followed by nothing.

    Example:
        >>> parse_response_body('{"a": 1}{"agentic_message_ids": []}{"message": "hi"}')
        {'message': 'hi'}
    """
    try:
        return json.loads(raw_body)
    except json.JSONDecodeError as exc:
        direct_error = exc

    occurrences = raw_body.count(STREAM_SENTINEL)
    if occurrences != 1:
        raise ResponseDecodeError(
            f"Response body is not valid JSON and contains {occurrences} stream sentinels (expected exactly 1): {direct_error}"
        ) from direct_error

    _, _, answer = raw_body.partition(STREAM_SENTINEL)
    if not answer.strip():
        raise ResponseDecodeError(
            "Response stream has no answer object after the stream sentinel"
        ) from direct_error

    _LOGGER.debug(
        f"[client:parse_response_body] Direct decode failed, decoding {len(answer)} chars after stream sentinel"
    )
    try:
        return json.loads(answer)
    except json.JSONDecodeError as exc:
        raise ResponseDecodeError(
            f"Answer object after the stream sentinel is not valid JSON: {exc}"
        ) from exc
