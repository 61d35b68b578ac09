"""
Scorekeeper Backend — Request Logging Middleware
==================================================

What:  One access-log line per HTTP request.
How:   Measures the handler's duration and logs method, path, status,
       duration, request ID and client IP on the `scorekeeper.access` logger.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Level by status class:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request bodies are never logged (they carry passwords).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from scorekeeper.middleware.request_id import request_id_var

logger = logging.getLogger("scorekeeper.access")

# Probed every few seconds by orchestrators
QUIET_PATHS = {"/health"}


def _level_for(status: int) -> int:
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
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        rid = request_id_var.get("")

        logger.log(
            _level_for(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
