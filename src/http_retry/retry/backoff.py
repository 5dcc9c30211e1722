"""
Backoff delay computation.

The server's Retry-After hint wins when it can be parsed. Otherwise the
delay grows exponentially with the attempt number, plus the configured base
delay and up to one second of random jitter:

    attempt < 2:   delay + r
    attempt >= 2:  (2**attempt - 1) * 0.5 + delay + r      r in [0, 1)

Every result is capped at ``options.max_delay``.
"""

import random
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Callable, Optional

import httpx
import structlog

from http_retry.retry.constants import (
    MAX_RETRY_AFTER_SECONDS,
    MILLISECONDS_PER_SECOND,
    RETRY_AFTER_HEADER,
)
from http_retry.retry.options import RetryOptions

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_retry_after(
    value: str, now: Callable[[], datetime] = _utcnow
) -> Optional[float]:
    """
    Parse a Retry-After header value into seconds.

    Accepts both forms allowed by RFC 9110: a non-negative integer number
    of seconds, or an HTTP-date. A date in the past yields 0. Only ASCII
    digits count as delta-seconds; values above MAX_RETRY_AFTER_SECONDS
    are clamped to it.

    Args:
        value: Raw header value
        now: Clock returning an aware UTC datetime

    Returns:
        Seconds to wait, or None if the value is in neither form
    """
    value = value.strip()
    if value.isascii() and value.isdigit():
        if len(value.lstrip("0")) > len(str(MAX_RETRY_AFTER_SECONDS)):
            return float(MAX_RETRY_AFTER_SECONDS)
        return float(min(int(value), MAX_RETRY_AFTER_SECONDS))

    try:
        target = parsedate_to_datetime(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if target is None:
        return None
    if target.tzinfo is None:
        # RFC 850 / asctime forms carry no zone; HTTP-dates are always GMT
        target = target.replace(tzinfo=timezone.utc)

    return max(0.0, (target - now()).total_seconds())


class BackoffCalculator:
    """
    Computes the wait before the next resend.

    The random source and the clock are injectable so tests can pin the
    jitter term and the reference time for HTTP-date hints.

    Attributes:
        random_source: Callable returning a uniform float in [0, 1)
        clock: Callable returning the current aware UTC datetime
        logger: Receives the malformed-header warning
    """

    def __init__(
        self,
        random_source: Callable[[], float] = random.random,
        clock: Callable[[], datetime] = _utcnow,
        log: Optional[Any] = None,
    ):
        self.random_source = random_source
        self.clock = clock
        self.logger = log if log is not None else logger

    def compute_delay_ms(
        self, response: httpx.Response, options: RetryOptions, attempt: int
    ) -> int:
        """
        Compute the backoff for a failed response.

        Args:
            response: Response that triggered the retry
            options: Active retry options (base delay and cap)
            attempt: 1-based number of sends performed so far

        Returns:
            Delay in milliseconds, never above ``options.max_delay`` seconds
        """
        cap_ms = options.max_delay * MILLISECONDS_PER_SECOND

        header = response.headers.get(RETRY_AFTER_HEADER)
        if header is not None:
            seconds = parse_retry_after(header, now=self.clock)
            if seconds is not None:
                return int(min(seconds * MILLISECONDS_PER_SECOND, cap_ms))

            self.logger.warning(
                "Ignoring malformed Retry-After header, using exponential backoff",
                retry_after=header,
                attempt=attempt,
            )

        return int(min(self.exponential_delay_ms(options.delay, attempt), cap_ms))

    def exponential_delay_ms(self, delay: float, attempt: int) -> float:
        """Uncapped exponential backoff with jitter, in milliseconds."""
        exponential = (2.0 ** attempt - 1) * 0.5
        seconds = delay if attempt < 2 else exponential + delay
        seconds += self.random_source()
        return seconds * MILLISECONDS_PER_SECOND
