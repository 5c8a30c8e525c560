"""
EMS Backend — Request Logging Middleware
=========================================

What:  One access-log line per HTTP request on the `ems.access` logger.
How:   Lines carry the matched route template (/employees/{employee_id})
       rather than the raw path, so requests for different ids aggregate under
       one key. The request ID comes from RequestIDLogFilter, not the message.

What we log vs what we DON'T log:
    ✅ Log: method, route, status, duration, client address
    ❌ Don't log: request bodies (employee names are personal data)
"""

import logging
import time
from typing import Optional, Set

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ems.config import settings

logger = logging.getLogger("ems.access")


def quiet_paths() -> Set[str]:
    """Health check and documentation paths, which are not access-logged."""
    return {"/health", "/openapi.json", "/redoc", settings.docs_url}


def route_template(request: Request) -> str:
    """The path template of the matched route, or the raw path when none matched."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request; 5xx at ERROR, 4xx at WARNING, the rest at INFO."""

    def __init__(self, app, skip_paths: Optional[Set[str]] = None):
        super().__init__(app)
        self.skip_paths = quiet_paths() if skip_paths is None else skip_paths

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.skip_paths:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        route = route_template(request)
        client_ip = request.client.host if request.client else "unknown"
        logger.log(
            log_level,
            "%s %s %d %.1fms from %s",
            request.method,
            route,
            status,
            duration_ms,
            client_ip,
            extra={
                "method": request.method,
                "route": route,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
