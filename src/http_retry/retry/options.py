"""
Retry policy options.

RetryOptions is the immutable configuration consulted by the decision
engine and the backoff calculator. One instance is owned by the retry
transport for the lifetime of the client; a different instance can be
attached to a single request under ``request.extensions["retry_options"]``
to override it for that exchange only.
"""

from typing import TYPE_CHECKING, Callable, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, model_validator

from http_retry.retry.constants import (
    DEFAULT_DELAY_SECONDS,
    DEFAULT_MAX_RETRIES,
    MAX_DELAY_SECONDS,
    MAX_MAX_RETRIES,
)

if TYPE_CHECKING:
    from http_retry.config import Settings


ShouldRetry = Callable[[float, int, httpx.Request, httpx.Response], bool]
"""
Custom eligibility predicate: ``(delay, attempt, request, response) -> bool``.

Called only after status, budget and replayability checks have passed.
Any callable with this signature works; there is no base class to extend.
"""


def always_retry(
    delay: float, attempt: int, request: httpx.Request, response: httpx.Response
) -> bool:
    """Default predicate: never vetoes a retry."""
    return True


class RetryOptions(BaseModel):
    """
    Immutable retry policy.

    Attributes:
        max_retries: Maximum number of resends (0 disables retrying)
        delay: Base backoff delay in seconds
        max_delay: Upper bound for a single wait, in seconds
        should_retry: Custom predicate; None disables retrying entirely
    """
    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(
        default=DEFAULT_MAX_RETRIES,
        ge=0,
        le=MAX_MAX_RETRIES,
        description="Maximum number of resends for one exchange",
    )
    delay: float = Field(
        default=DEFAULT_DELAY_SECONDS,
        gt=0,
        le=MAX_DELAY_SECONDS,
        description="Base delay in seconds added to every computed backoff",
    )
    max_delay: float = Field(
        default=MAX_DELAY_SECONDS,
        gt=0,
        le=MAX_DELAY_SECONDS,
        description="Cap in seconds for a single backoff wait",
    )
    should_retry: Optional[ShouldRetry] = Field(
        default=always_retry,
        description="Predicate (delay, attempt, request, response) -> bool",
    )

    @model_validator(mode="after")
    def check_delay_within_cap(self) -> "RetryOptions":
        if self.delay > self.max_delay:
            raise ValueError(
                f"delay ({self.delay}s) must not exceed max_delay ({self.max_delay}s)"
            )
        return self

    @classmethod
    def from_settings(cls, settings: "Settings", **overrides) -> "RetryOptions":
        """
        Build options from application settings.

        Args:
            settings: Loaded Settings instance
            **overrides: Field values taking precedence over settings

        Returns:
            RetryOptions populated from RETRY_* settings
        """
        values = {
            "max_retries": settings.RETRY_MAX_RETRIES,
            "delay": settings.RETRY_DELAY_SECONDS,
            "max_delay": settings.RETRY_MAX_DELAY_SECONDS,
        }
        values.update(overrides)
        return cls(**values)
