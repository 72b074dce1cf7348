"""
Hersteller Service — Access Log Middleware
============================================

What:  One log line per HTTP request on the `hersteller.access` logger.
How:   Measures the time spent in the rest of the chain and logs
       method, path, status, duration, request id and client address.

    GET /rest/4d1c... 200 3.2ms [a1b2c3d4] from 127.0.0.1

Level by status class: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
Request bodies are never logged. /health is skipped.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from hersteller_api.middleware.request_id import request_id_var

logger = logging.getLogger("hersteller.access")

UNLOGGED_PATHS = frozenset(("/health",))


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request except the health probe."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in UNLOGGED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        status = response.status_code
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
