"""
Request body replayability checks.

A body can only be resent if it is held in memory with a known length.
Forward-only streams (generators, file iterators) are consumed by the first
send, so exchanges carrying them fail without retry.
"""

import httpx

from http_retry.retry.constants import BODY_METHODS, UNKNOWN_LENGTH


def body_length(request: httpx.Request) -> int:
    """
    Return the request body size in bytes, or UNKNOWN_LENGTH.

    Raises:
        httpx.StreamError: Body is a stream that has not been read
        ValueError: Declared Content-Length is not an integer
    """
    if request.headers.get("Transfer-Encoding", "").lower() == "chunked":
        return UNKNOWN_LENGTH

    # Raises httpx.RequestNotRead for streaming bodies
    content = request.content

    declared = request.headers.get("Content-Length")
    if declared is not None:
        return int(declared)
    return len(content)


def is_replayable(request: httpx.Request) -> bool:
    """
    Check whether the request can be sent again without losing body data.

    Only POST, PUT and PATCH are inspected; every other method is treated
    as replayable. A failing length query counts as "not replayable".
    """
    if request.method.upper() not in BODY_METHODS:
        return True

    try:
        return body_length(request) != UNKNOWN_LENGTH
    except (httpx.StreamError, ValueError):
        return False
