"""
Person API — Access Log Middleware
===================================

What:  One `person_api.access` line per person API request.
How:   Wraps the rest of the stack, then logs method, route, status, duration
       and request ID. Requests under /api/ are also tagged with how the
       path segment was resolved (`lookup=id` or `lookup=name`), which tells
       a 404 for a valid-but-missing identifier apart from an unknown name.

Health checks and the documentation pages are not logged. The lookup value
itself is replaced by the route template and request bodies are never
logged; names are personal data.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from person_api.identifiers import ByIdentifier, lookup_key
from person_api.middleware.request_id import request_id_var

logger = logging.getLogger("person_api.access")

SKIPPED_PATHS = frozenset(
    {"/health", "/api-docs", "/api-docs/oauth2-redirect", "/redoc", "/openapi.json"}
)
API_PREFIX = "/api/"
LOOKUP_ROUTE = "/api/{id_or_name}"


def lookup_kind(path: str) -> Optional[str]:
    """'id' or 'name' for /api/{id_or_name} paths, None elsewhere."""
    if not path.startswith(API_PREFIX) or len(path) == len(API_PREFIX):
        return None
    key = lookup_key(path[len(API_PREFIX):])
    return "id" if isinstance(key, ByIdentifier) else "name"


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get()
        kind = lookup_kind(path)
        status = response.status_code
        logged_path = LOOKUP_ROUTE if kind else path
        suffix = f" lookup={kind}" if kind else ""

        logger.log(
            level_for_status(status),
            "[%s] %s %s -> %d in %.1fms%s",
            rid,
            request.method,
            logged_path,
            status,
            duration_ms,
            suffix,
            extra={
                "request_id": rid,
                "method": request.method,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "lookup": kind,
            },
        )
        return response
