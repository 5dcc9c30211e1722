"""
Integration tests for http-retry.

Test components together through real httpx clients:
- Client factories (sync and async) with settings-driven defaults
- Full retry exchanges against httpx.MockTransport
- Per-request options passed via request extensions
"""
