"""
Retry transport exceptions.

Retry decisions are normal results, not errors: a response that is not
retried is simply returned to the caller. The only exception raised by the
transports is RetryInterrupted, and only when the transport was built with
``abort_on_interrupt=True``.
"""


class RetryError(Exception):
    """
    Base exception for all retry transport errors.

    Attributes:
        message: Human-readable description
        details: Structured context for logging
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class RetryInterrupted(RetryError):
    """
    Raised when the backoff wait is interrupted and the transport is
    configured to abort the exchange instead of resending.

    The held response is closed before this is raised. The interrupting
    exception is available as ``__cause__``.

    Attributes:
        attempt: Number of sends performed before the interruption
        delay_ms: Backoff that was being waited on
    """

    def __init__(self, attempt: int, delay_ms: int):
        self.attempt = attempt
        self.delay_ms = delay_ms
        super().__init__(
            f"Backoff wait of {delay_ms}ms interrupted after attempt {attempt}",
            details={"attempt": attempt, "delay_ms": delay_ms},
        )
