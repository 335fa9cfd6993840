"""
Catalog API — Request Logging Middleware
==========================================

What:  One access-log line per HTTP request with status and duration.
How:   Measures time around call_next and logs on the `catalog_api.access`
       logger, choosing the level from the status code.

Log line:
    GET /api/products 200 3.4ms [a1b2c3d4] from 127.0.0.1

    ✅ Logged: method, path, status, duration, client IP, request ID
    ❌ Not logged: request bodies or query strings
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from catalog_api.middleware.request_id import request_id_var

logger = logging.getLogger("catalog_api.access")

# Probed every few seconds by orchestrators; too noisy to log
SILENT_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SILENT_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        rid = request_id_var.get("")
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
