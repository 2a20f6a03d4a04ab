"""
SurfSpots Backend — Request Logging Middleware
================================================

What:  One access-log line per HTTP request with status and duration.
Why:   Gives a per-request record for debugging and latency checks without
       touching route handlers.
How:   Measures from middleware entry to response return and picks the log
       level from the status code (5xx ERROR, 4xx WARNING, else INFO).
Who:   Applied to every request via Starlette middleware.
When:  After RequestIDMiddleware, so the request ID is available.

What we log vs what we DON'T log:
    ✅ Log: method, path, status, duration, client IP, request ID
    ❌ Don't log: request bodies (passwords on /auth/token), query strings,
       Authorization headers
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from surfspots.middleware.request_id import request_id_var

logger = logging.getLogger("surfspots.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request once the response is ready.

    Log levels:
        5xx → ERROR, 4xx → WARNING, everything else → INFO

    The same fields are passed in ``extra`` for handlers that emit
    structured records.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path

        # Why skip: load balancers poll /health every few seconds and would
        # drown out real traffic
        if path == "/health":
            return await call_next(request)

        # Why perf_counter: monotonic, unaffected by wall-clock adjustments
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

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
