"""
Person API — Middleware Package
================================

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    The request ID is set first so the access log line carries it; the
    response passes back through the same chain and picks up X-Request-ID.
"""
