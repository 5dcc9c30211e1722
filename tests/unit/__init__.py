"""
Unit tests for http-retry.

Test individual components in isolation:
- RetryOptions (validation, immutability, settings)
- Replay guard (body replayability per method and stream type)
- Backoff calculator (Retry-After forms, exponential formula, cap)
- Decision engine (each retry condition)
- Retry transports (loop, resource release, interruption)
"""
