"""
Trazure Backend — Request ID Middleware
=========================================

What:  Gives every request a short correlation ID and returns it in the
       X-Request-ID response header.
Why:   Log lines and error bodies of one request share the same ID, so a
       client-reported error can be found in the server logs.
How:   Accepts a client-supplied X-Request-ID, otherwise generates one, and
       stores it in a ContextVar read by loggers and exception handlers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars is enough for correlation and stays readable in logs
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
