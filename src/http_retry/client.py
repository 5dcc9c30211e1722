"""
httpx client factories with the retry transport mounted.

Settings supply the defaults; anything passed explicitly wins.
"""

from typing import Optional

import httpx

from http_retry.config import Settings, settings as default_settings
from http_retry.logging_config import configure_logging
from http_retry.retry.options import RetryOptions
from http_retry.retry.transport import AsyncRetryTransport, RetryTransport


def create_client(
    options: Optional[RetryOptions] = None,
    transport: Optional[httpx.BaseTransport] = None,
    settings: Optional[Settings] = None,
    setup_logging: bool = False,
    **client_kwargs,
) -> httpx.Client:
    """
    Build an httpx.Client whose requests go through RetryTransport.

    Args:
        options: Default retry policy (default: built from settings)
        transport: Transport to wrap (default: httpx.HTTPTransport())
        settings: Settings to read defaults from (default: global settings)
        setup_logging: Also apply configure_logging(settings)
        **client_kwargs: Passed to httpx.Client (base_url, timeout, ...)
    """
    settings = settings or default_settings
    if setup_logging:
        configure_logging(settings)
    retry_transport = RetryTransport(
        transport,
        options or RetryOptions.from_settings(settings),
        abort_on_interrupt=settings.RETRY_ABORT_ON_INTERRUPT,
        metrics_enabled=settings.PROMETHEUS_ENABLED,
    )
    return httpx.Client(transport=retry_transport, **client_kwargs)


def create_async_client(
    options: Optional[RetryOptions] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    settings: Optional[Settings] = None,
    setup_logging: bool = False,
    **client_kwargs,
) -> httpx.AsyncClient:
    """Async counterpart of create_client."""
    settings = settings or default_settings
    if setup_logging:
        configure_logging(settings)
    retry_transport = AsyncRetryTransport(
        transport,
        options or RetryOptions.from_settings(settings),
        abort_on_interrupt=settings.RETRY_ABORT_ON_INTERRUPT,
        metrics_enabled=settings.PROMETHEUS_ENABLED,
    )
    return httpx.AsyncClient(transport=retry_transport, **client_kwargs)
