"""
Scorekeeper Backend — Request ID Middleware
=============================================

What:  Assigns a correlation ID to each request and echoes it in the response.
How:   Uses the client's X-Request-ID when present, otherwise a short UUID.
       The ID lives in a ContextVar, so any log record emitted while the
       request is being handled can carry it (see RequestIDLogFilter).
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDLogFilter(logging.Filter):
    """Adds ``record.request_id`` ("-" outside of a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Take X-Request-ID from the request, or generate 8 hex chars
        2. Store it in request_id_var and request.state.request_id
        3. Add it to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
