"""
Retry eligibility.

RetryDecisionEngine answers a single question for the transport: should
this response be retried? It never sleeps and never touches the response
body, so it can be tested without timing or I/O.
"""

from typing import Any, Optional

import httpx
import structlog

from http_retry.retry.constants import TRANSIENT_STATUS_CODES
from http_retry.retry.options import RetryOptions
from http_retry.retry.replay import is_replayable

logger = structlog.get_logger(__name__)


def is_transient_status(status_code: int) -> bool:
    """True for 429, 503 and 504."""
    return status_code in TRANSIENT_STATUS_CODES


class RetryDecisionEngine:
    """
    Combines every retry condition into one verdict.

    A retry is granted only if all of the following hold, checked in order:
    1. options are present and define a should_retry predicate
    2. attempt <= options.max_retries
    3. the status code is transient (429, 503, 504)
    4. the request body is replayable
    5. the predicate returns True for (delay, attempt, request, response)

    The predicate is not called unless checks 1-4 pass.
    """

    def __init__(self, log: Optional[Any] = None):
        self.logger = log if log is not None else logger

    def should_retry(
        self,
        response: httpx.Response,
        attempt: int,
        request: httpx.Request,
        options: Optional[RetryOptions],
    ) -> bool:
        if options is None or options.should_retry is None:
            return False

        if attempt > options.max_retries:
            self.logger.debug(
                "Retry budget exhausted",
                attempt=attempt,
                max_retries=options.max_retries,
                status_code=response.status_code,
            )
            return False

        if not is_transient_status(response.status_code):
            return False

        if not is_replayable(request):
            self.logger.debug(
                "Request body is not replayable, returning response without retry",
                method=request.method,
                url=str(request.url),
                status_code=response.status_code,
            )
            return False

        return bool(options.should_retry(options.delay, attempt, request, response))
