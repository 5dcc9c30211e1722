"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

from typing import Optional, Union

import httpx
import pytest

from http_retry.config import Settings
from http_retry.retry.backoff import BackoffCalculator
from http_retry.retry.options import RetryOptions


TEST_URL = "https://api.example.com/items"

ScriptItem = Union[int, tuple[int, dict]]


class ScriptedHandler:
    """MockTransport handler replaying a fixed sequence of responses.

    Each item is a status code or a (status code, headers) tuple. Every
    request received and every response handed out is recorded so tests
    can inspect headers and whether superseded responses were closed.

    Usage:
        handler = ScriptedHandler(503, (429, {"Retry-After": "5"}), 200)
        transport = httpx.MockTransport(handler)
    """

    def __init__(self, *script: ScriptItem):
        self.script = list(script)
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []
        # Closed-state of earlier responses observed at each send
        self.closed_at_send: list[list[bool]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.closed_at_send.append([r.is_closed for r in self.responses])
        self.requests.append(request)

        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        status, headers = item if isinstance(item, tuple) else (item, {})
        # Unread body: is_closed stays False until closed or consumed
        response = httpx.Response(
            status, headers=headers, stream=httpx.ByteStream(b"payload")
        )
        self.responses.append(response)
        return response

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def attempt_headers(self) -> list[Optional[str]]:
        return [r.headers.get("Retry-Attempt") for r in self.requests]


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing."""
    return Settings(
        APP_NAME="http-retry (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        RETRY_MAX_RETRIES=3,
        RETRY_DELAY_SECONDS=3.0,
        RETRY_MAX_DELAY_SECONDS=180.0,
        RETRY_ABORT_ON_INTERRUPT=False,
        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def retry_options() -> RetryOptions:
    """Default policy: 3 retries, 3s base delay, 180s cap, always-true predicate."""
    return RetryOptions()


@pytest.fixture
def no_jitter_backoff() -> BackoffCalculator:
    """BackoffCalculator whose jitter term is always 0."""
    return BackoffCalculator(random_source=lambda: 0.0)


@pytest.fixture
def scripted():
    """Factory fixture building a ScriptedHandler.

    Usage:
        def test_something(scripted):
            handler = scripted(503, 200)
    """
    def _create(*script: ScriptItem) -> ScriptedHandler:
        return ScriptedHandler(*script)

    return _create


@pytest.fixture
def get_request() -> httpx.Request:
    """Plain GET request with no body."""
    return httpx.Request("GET", TEST_URL)


@pytest.fixture
def make_response():
    """Factory fixture to create a response with custom status and headers.

    Usage:
        def test_something(make_response):
            response = make_response(429, {"Retry-After": "5"})
    """
    def _create(status_code: int = 503, headers: Optional[dict] = None) -> httpx.Response:
        return httpx.Response(status_code, headers=headers or {})

    return _create
