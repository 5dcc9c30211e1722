"""
HTTP retry policy for httpx clients.

Retries requests that fail with 429, 503 or 504, honoring Retry-After and
otherwise backing off exponentially with jitter. Plugs into httpx as a
transport wrapping the real one.
"""

from http_retry.client import create_async_client, create_client
from http_retry.logging_config import configure_logging
from http_retry.retry import (
    AsyncRetryTransport,
    RetryInterrupted,
    RetryOptions,
    RetryTransport,
)

__version__ = "0.1.0"

__all__ = [
    "AsyncRetryTransport",
    "RetryInterrupted",
    "RetryOptions",
    "RetryTransport",
    "configure_logging",
    "create_async_client",
    "create_client",
]
