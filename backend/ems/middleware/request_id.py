"""
EMS Backend — Request ID Middleware
====================================

What:  Assigns a short correlation ID to each request and returns it in X-Request-ID.
Why:   Every log line and error body for one request carries the same ID.
How:   Reuses a well-formed client X-Request-ID, otherwise generates one; stores
       it in a ContextVar read by the exception handlers and by
       RequestIDLogFilter, which stamps it on every log record.
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client IDs end up in log lines and response headers
_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_request_id(header_value: Optional[str]) -> str:
    """Return the client's ID when it is well-formed, else a fresh 8-char ID."""
    if header_value and _CLIENT_ID_PATTERN.fullmatch(header_value):
        return header_value
    return uuid.uuid4().hex[:8]


class RequestIDLogFilter(logging.Filter):
    """Adds `request_id` to every record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Client IDs longer than 64 characters or containing anything other than
    letters, digits, '.', '_' and '-' are replaced with a generated one.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get("X-Request-ID"))

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
