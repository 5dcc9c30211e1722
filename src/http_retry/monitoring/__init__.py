"""Prometheus metrics for the retry transports."""

from http_retry.monitoring.metrics import (
    retries_total,
    retry_backoff_seconds,
    retry_interrupted_total,
)

__all__ = [
    "retries_total",
    "retry_backoff_seconds",
    "retry_interrupted_total",
]
