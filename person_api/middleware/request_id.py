"""
Person API — Request ID Middleware
===================================

What:  Tags every request with an ID and echoes it as X-Request-ID.
How:   A client-supplied X-Request-ID is reused only when it is a short token
       of letters, digits, ".", "_" or "-". Anything else (empty, too long,
       containing spaces or control characters) is replaced by a fresh
       12-hex ID so log lines stay one token wide.

The ID is published on `request_id_var` for loggers and on
`request.state.request_id` for handlers.
"""

import re
import secrets
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64

_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._-]+")

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def accept_request_id(candidate: Optional[str]) -> Optional[str]:
    """Return the client's request ID if it is safe to log, else None."""
    if not candidate or len(candidate) > MAX_REQUEST_ID_LENGTH:
        return None
    if not _REQUEST_ID_RE.fullmatch(candidate):
        return None
    return candidate


def generate_request_id() -> str:
    return secrets.token_hex(6)


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accept_request_id(request.headers.get(REQUEST_ID_HEADER)) or generate_request_id()

        # Left set after the call: the catch-all 500 handler runs outside
        # this middleware and still reads it
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
