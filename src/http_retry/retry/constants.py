"""
Wire-level constants shared by the retry components.

Status codes are exported so callers writing a custom ``should_retry``
predicate can compare against the same set the decision engine uses.
"""

TOO_MANY_REQUESTS = 429
SERVICE_UNAVAILABLE = 503
GATEWAY_TIMEOUT = 504

TRANSIENT_STATUS_CODES = frozenset(
    {TOO_MANY_REQUESTS, SERVICE_UNAVAILABLE, GATEWAY_TIMEOUT}
)

# Request header carrying the number of sends already performed
RETRY_ATTEMPT_HEADER = "Retry-Attempt"
# Response header with the server's backoff hint
RETRY_AFTER_HEADER = "Retry-After"

# Key under request.extensions holding a per-request RetryOptions
RETRY_OPTIONS_KEY = "retry_options"

# Methods whose body must be replayable before a resend
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

UNKNOWN_LENGTH = -1

DEFAULT_MAX_RETRIES = 3
DEFAULT_DELAY_SECONDS = 3.0
MAX_MAX_RETRIES = 10
MAX_DELAY_SECONDS = 180.0

MILLISECONDS_PER_SECOND = 1000

# Ceiling for a delta-seconds Retry-After before the per-options cap applies
MAX_RETRY_AFTER_SECONDS = 86_400
