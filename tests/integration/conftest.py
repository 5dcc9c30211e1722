"""Integration test fixtures.

Integration tests run full httpx clients built by the client factories,
with an httpx.MockTransport standing in for the network.
"""

import pytest

from http_retry.retry.options import RetryOptions


@pytest.fixture
def fast_options() -> RetryOptions:
    """Real retry policy with waits capped at 20ms so tests stay fast."""
    return RetryOptions(max_retries=3, delay=0.01, max_delay=0.02)
