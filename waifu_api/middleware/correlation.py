"""
Middleware for assigning correlation IDs to incoming requests.

This module defines a Starlette `BaseHTTPMiddleware` subclass that injects a
unique UUID into a context variable for each request.  `RequestIdFilter`
copies the value onto every log record so log lines belonging to the same
request can be grouped.  The correlation ID is also returned to clients via
the `X-Request-ID` response header.
"""
from __future__ import annotations

import contextvars
import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware

# Context variable to hold the current request ID
request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware that sets a unique request ID for each request."""

    async def dispatch(self, request, call_next):  # type: ignore[override]
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_ctx.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers.setdefault("X-Request-ID", rid)
        return response


class RequestIdFilter(logging.Filter):
    """Logging filter exposing the current request ID as ``%(request_id)s``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get() or "-"
        return True
