"""
svc-notes: Request Logging Middleware
=======================================

What:  One access-log line per HTTP request, on logger `svc_notes.access`.
How:   Times the downstream app and logs method, path, status, duration,
       request ID and client address. An exception that escapes the route
       handlers is logged with its traceback and answered with the generic
       500 body here, so it still gets an access line and an X-Request-ID.
When:  Inside RequestIDMiddleware, so the request ID is already set.

Applies to every route, including /healthz, /readyz, /metrics and /docs.

Log level by status:
    5xx → ERROR
    4xx → WARNING
    else → INFO

Request bodies are never logged.
"""

import logging
import time

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from svc_notes.middleware.request_id import request_id_var

logger = logging.getLogger("svc_notes.access")
error_logger = logging.getLogger("svc_notes.errors")

INTERNAL_ERROR_BODY = {"error": "Internal server error"}


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log plus last-resort 500 for unhandled handler errors."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        rid = request_id_var.get("")

        try:
            response = await call_next(request)
        except Exception as exc:
            error_logger.error(
                "[%s] Unhandled error on %s %s: %s",
                rid,
                request.method,
                request.url.path,
                exc,
                exc_info=exc,
            )
            response = JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)

        elapsed_ms = (time.perf_counter() - started) * 1000
        peer = request.client.host if request.client else "unknown"
        logger.log(
            _level_for(response.status_code),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            rid,
            peer,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": peer,
            },
        )
        return response
