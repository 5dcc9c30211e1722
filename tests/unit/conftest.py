"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without timing or network dependencies.
"""

from unittest.mock import AsyncMock, Mock

import pytest


@pytest.fixture
def mock_logger():
    """Mock structlog logger capturing calls by level."""
    mock = Mock()
    mock.debug = Mock()
    mock.info = Mock()
    mock.warning = Mock()
    mock.error = Mock()
    return mock


@pytest.fixture
def mock_sleep():
    """Blocking sleep stand-in recording requested durations (seconds)."""
    return Mock(return_value=None)


@pytest.fixture
def mock_async_sleep():
    """asyncio.sleep stand-in recording requested durations (seconds)."""
    return AsyncMock(return_value=None)
