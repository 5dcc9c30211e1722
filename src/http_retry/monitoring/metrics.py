"""Prometheus metrics for the retry transports.

Registered in the default prometheus_client registry; expose them with
``prometheus_client.start_http_server`` or an existing /metrics endpoint.
Alert rules worth configuring:
- retries_total (sustained 429s mean the client is over its quota)
- retry_interrupted_total (waits cut short by shutdown or signals)
"""

from prometheus_client import Counter, Histogram

# === Retry Metrics ===

retries_total = Counter(
    "http_retry_retries_total",
    "Total resends performed by the retry transport",
    ["status_code"],
)
"""
Resend counter by the status code that triggered it.

Labels:
- status_code: 429, 503 or 504
"""

retry_backoff_seconds = Histogram(
    "http_retry_backoff_seconds",
    "Backoff waited before each resend",
    buckets=[0.5, 1, 2, 3, 5, 10, 30, 60, 120, 180],
)
"""
Distribution of computed backoff delays.

Buckets top out at 180s, the largest allowed max_delay.
"""

retry_interrupted_total = Counter(
    "http_retry_interrupted_total",
    "Total backoff waits interrupted before completion",
    ["aborted"],
)
"""
Interrupted waits.

Labels:
- aborted: true (exchange aborted with RetryInterrupted), false (resent anyway)
"""
