"""
Retry transports for httpx.

RetryTransport and AsyncRetryTransport wrap another transport and resend a
request while the decision engine allows it. They are the stage the httpx
client calls; the wrapped transport is the next stage in the chain.

Loop per exchange:
    send -> evaluate -> [wait -> close previous response -> resend]* -> return

Sends within one exchange are strictly sequential, and a superseded
response is always closed before the next send. The final response is
returned unread; its owner is the caller.

Usage:
    transport = RetryTransport(httpx.HTTPTransport(), options=RetryOptions(max_retries=5))
    with httpx.Client(transport=transport) as client:
        client.get("https://example.com")
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Optional

import httpx
import structlog

from http_retry.monitoring.metrics import (
    retries_total,
    retry_backoff_seconds,
    retry_interrupted_total,
)
from http_retry.retry.backoff import BackoffCalculator
from http_retry.retry.constants import (
    MILLISECONDS_PER_SECOND,
    RETRY_ATTEMPT_HEADER,
    RETRY_OPTIONS_KEY,
)
from http_retry.retry.decision import RetryDecisionEngine
from http_retry.retry.exceptions import RetryInterrupted
from http_retry.retry.options import RetryOptions

logger = structlog.get_logger(__name__)


def with_attempt_header(request: httpx.Request, attempt: int) -> httpx.Request:
    """
    Copy a request, setting Retry-Attempt to the number of prior sends.

    The body stream and extensions are shared with the original. Only
    replayable requests reach this point, so an in-memory body is loaded
    again on the copy.
    """
    headers = request.headers.copy()
    headers[RETRY_ATTEMPT_HEADER] = str(attempt)
    retried = httpx.Request(
        request.method,
        request.url,
        headers=headers,
        stream=request.stream,
        extensions=request.extensions,
    )
    if isinstance(request.stream, httpx.ByteStream):
        retried.read()
    return retried


class _RetryTransportBase:
    """
    State and helpers shared by the sync and async transports.

    Attributes:
        options: Default policy for exchanges without a per-request override
        decision_engine: Eligibility checks
        backoff: Delay computation
        abort_on_interrupt: Raise RetryInterrupted instead of resending when
            the wait is interrupted
        metrics_enabled: Record Prometheus metrics
    """

    def __init__(
        self,
        options: Optional[RetryOptions] = None,
        *,
        decision_engine: Optional[RetryDecisionEngine] = None,
        backoff: Optional[BackoffCalculator] = None,
        log: Optional[Any] = None,
        abort_on_interrupt: bool = False,
        metrics_enabled: bool = True,
    ):
        self.options = options if options is not None else RetryOptions()
        self.logger = log if log is not None else logger
        self.decision_engine = decision_engine or RetryDecisionEngine(log=self.logger)
        self.backoff = backoff or BackoffCalculator(log=self.logger)
        self.abort_on_interrupt = abort_on_interrupt
        self.metrics_enabled = metrics_enabled

    def resolve_options(self, request: httpx.Request) -> RetryOptions:
        """Per-request options from request.extensions win over the default."""
        override = request.extensions.get(RETRY_OPTIONS_KEY)
        if override is not None:
            return override
        return self.options

    def _on_retry(
        self, request: httpx.Request, response: httpx.Response, attempt: int, delay_ms: int
    ) -> None:
        self.logger.info(
            "Retrying request after transient failure",
            method=request.method,
            url=str(request.url),
            status_code=response.status_code,
            attempt=attempt,
            delay_ms=delay_ms,
        )
        if self.metrics_enabled:
            retries_total.labels(status_code=str(response.status_code)).inc()
            retry_backoff_seconds.observe(delay_ms / MILLISECONDS_PER_SECOND)

    def _on_interrupt(self, exc: BaseException, attempt: int, delay_ms: int) -> None:
        self.logger.error(
            "Backoff wait interrupted",
            exc_info=exc,
            attempt=attempt,
            delay_ms=delay_ms,
            aborting=self.abort_on_interrupt,
        )
        if self.metrics_enabled:
            retry_interrupted_total.labels(
                aborted=str(self.abort_on_interrupt).lower()
            ).inc()


class RetryTransport(_RetryTransportBase, httpx.BaseTransport):
    """
    Synchronous retry stage.

    The backoff wait blocks the calling thread. An InterruptedError raised
    by the sleep function is logged; by default the request is resent
    anyway, with ``abort_on_interrupt=True`` the exchange ends with
    RetryInterrupted instead. Any other exception from the wait closes the
    held response and propagates.
    """

    def __init__(
        self,
        transport: Optional[httpx.BaseTransport] = None,
        options: Optional[RetryOptions] = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
        **kwargs,
    ):
        """
        Initialize the retry transport.

        Args:
            transport: Wrapped transport (default: httpx.HTTPTransport())
            options: Default retry policy (default: RetryOptions())
            sleep: Blocking wait taking seconds
            **kwargs: decision_engine, backoff, log, abort_on_interrupt,
                metrics_enabled
        """
        super().__init__(options, **kwargs)
        self.transport = transport if transport is not None else httpx.HTTPTransport()
        self.sleep = sleep

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        options = self.resolve_options(request)
        response = self.transport.handle_request(request)

        attempt = 1
        while self.decision_engine.should_retry(response, attempt, request, options):
            delay_ms = self.backoff.compute_delay_ms(response, options, attempt)
            self._on_retry(request, response, attempt, delay_ms)
            try:
                self.sleep(delay_ms / MILLISECONDS_PER_SECOND)
            except InterruptedError as exc:
                self._on_interrupt(exc, attempt, delay_ms)
                if self.abort_on_interrupt:
                    response.close()
                    raise RetryInterrupted(attempt, delay_ms) from exc
            except BaseException:
                response.close()
                raise

            response.close()
            request = with_attempt_header(request, attempt)
            attempt += 1
            response = self.transport.handle_request(request)

        return response

    def close(self) -> None:
        self.transport.close()


class AsyncRetryTransport(_RetryTransportBase, httpx.AsyncBaseTransport):
    """
    Asynchronous retry stage.

    The backoff wait suspends the task without blocking the event loop, so
    many exchanges can wait concurrently. Task cancellation and any other
    exception from the wait propagate after the held response is closed.
    InterruptedError from a custom sleep follows the same rule as
    RetryTransport.
    """

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        options: Optional[RetryOptions] = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        **kwargs,
    ):
        """
        Initialize the async retry transport.

        Args:
            transport: Wrapped transport (default: httpx.AsyncHTTPTransport())
            options: Default retry policy (default: RetryOptions())
            sleep: Coroutine function taking seconds
            **kwargs: decision_engine, backoff, log, abort_on_interrupt,
                metrics_enabled
        """
        super().__init__(options, **kwargs)
        self.transport = transport if transport is not None else httpx.AsyncHTTPTransport()
        self.sleep = sleep

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        options = self.resolve_options(request)
        response = await self.transport.handle_async_request(request)

        attempt = 1
        while self.decision_engine.should_retry(response, attempt, request, options):
            delay_ms = self.backoff.compute_delay_ms(response, options, attempt)
            self._on_retry(request, response, attempt, delay_ms)
            try:
                await self.sleep(delay_ms / MILLISECONDS_PER_SECOND)
            except InterruptedError as exc:
                self._on_interrupt(exc, attempt, delay_ms)
                if self.abort_on_interrupt:
                    await response.aclose()
                    raise RetryInterrupted(attempt, delay_ms) from exc
            except BaseException:
                await response.aclose()
                raise

            await response.aclose()
            request = with_attempt_header(request, attempt)
            attempt += 1
            response = await self.transport.handle_async_request(request)

        return response

    async def aclose(self) -> None:
        await self.transport.aclose()
