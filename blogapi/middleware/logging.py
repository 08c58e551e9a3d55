"""
Blog API Backend: Request Logging Middleware
=============================================

What:  One access log line per HTTP request.
How:   Times the downstream call and logs method, path, status, duration,
       request id, client IP and, when the route authenticated the caller,
       the acting user id. Log level follows the status class.

Logged:     method, path, status, duration, IP, request id, user id
Not logged: request bodies, the Authorization header
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from blogapi.middleware.request_id import request_id_var

logger = logging.getLogger("blogapi.access")

# Probes every few seconds would drown the useful lines
SKIP_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs structured information about each HTTP request and response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        # Set by get_current_user_id on authenticated routes
        user_id = getattr(request.state, "user_id", None)
        rid = request_id_var.get("")

        logger.log(
            log_level,
            "%s %s %d %.1fms user=%s from %s",
            request.method,
            path,
            status,
            duration_ms,
            user_id if user_id is not None else "-",
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "user_id": user_id,
            },
        )
        return response
