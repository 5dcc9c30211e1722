"""
Retry stage for httpx transport stacks.

Resends requests that failed with a transient status (429, 503, 504),
waiting between sends either as long as the server's Retry-After asks or
with exponential backoff plus jitter.

Main Components:
    - RetryTransport / AsyncRetryTransport: the retry loop
    - RetryDecisionEngine: retry/no-retry verdict
    - BackoffCalculator: wait before each resend
    - is_replayable: whether a request body can be sent twice
    - RetryOptions: immutable policy

Usage:
    >>> from http_retry.retry import RetryOptions, RetryTransport
    >>> transport = RetryTransport(options=RetryOptions(max_retries=5))
    >>> client = httpx.Client(transport=transport)

Per-request policy:
    >>> client.get(url, extensions={"retry_options": RetryOptions(max_retries=0)})
"""

from http_retry.retry.backoff import BackoffCalculator, parse_retry_after
from http_retry.retry.constants import (
    GATEWAY_TIMEOUT,
    RETRY_AFTER_HEADER,
    RETRY_ATTEMPT_HEADER,
    RETRY_OPTIONS_KEY,
    SERVICE_UNAVAILABLE,
    TOO_MANY_REQUESTS,
    TRANSIENT_STATUS_CODES,
)
from http_retry.retry.decision import RetryDecisionEngine, is_transient_status
from http_retry.retry.exceptions import RetryError, RetryInterrupted
from http_retry.retry.options import RetryOptions, ShouldRetry, always_retry
from http_retry.retry.replay import body_length, is_replayable
from http_retry.retry.transport import (
    AsyncRetryTransport,
    RetryTransport,
    with_attempt_header,
)

__all__ = [
    "AsyncRetryTransport",
    "BackoffCalculator",
    "GATEWAY_TIMEOUT",
    "RETRY_AFTER_HEADER",
    "RETRY_ATTEMPT_HEADER",
    "RETRY_OPTIONS_KEY",
    "RetryDecisionEngine",
    "RetryError",
    "RetryInterrupted",
    "RetryOptions",
    "RetryTransport",
    "SERVICE_UNAVAILABLE",
    "ShouldRetry",
    "TOO_MANY_REQUESTS",
    "TRANSIENT_STATUS_CODES",
    "always_retry",
    "body_length",
    "is_replayable",
    "is_transient_status",
    "parse_retry_after",
    "with_attempt_header",
]
