"""Structured logging configuration using structlog.

Retry transports log through structlog loggers whether or not this module
is used. configure_logging wires those loggers, and the stdlib loggers of
the HTTP stack, to a single handler driven by Settings:

    LOG_LEVEL        root level
    ENVIRONMENT      "production" renders JSON, anything else the console
    APP_NAME         stamped on every event as ``app``
    HTTP_LOG_LEVEL   level for the httpx and httpcore loggers
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from http_retry.config import Settings, settings as default_settings


class AppContext:
    """Processor stamping the application name and environment on events."""

    def __init__(self, app_name: str, environment: str):
        self.app_name = app_name
        self.environment = environment

    def __call__(
        self, logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("app", self.app_name)
        event_dict.setdefault("environment", self.environment)
        return event_dict


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog and the stdlib root logger from settings.

    Args:
        settings: Source of LOG_LEVEL, ENVIRONMENT, APP_NAME and
            HTTP_LOG_LEVEL (default: global settings)
    """
    settings = settings or default_settings
    level = _level(settings.LOG_LEVEL)
    is_production = settings.ENVIRONMENT.lower() == "production"

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        AppContext(settings.APP_NAME, settings.ENVIRONMENT),
    ]

    if is_production:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # httpx and httpcore log through the stdlib; render them the same way
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    http_level = _level(settings.HTTP_LOG_LEVEL)
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(http_level)

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=settings.LOG_LEVEL,
        renderer="json" if is_production else "console",
    )
