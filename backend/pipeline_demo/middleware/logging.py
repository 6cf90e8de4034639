"""
Pipeline Demo — Request Logging Middleware
===========================================

What:  One log line per HTTP request: method, original URL, status, duration, request ID.
Why:   The CI job log is the only place a failing run can be diagnosed.
How:   Measures wall time around call_next and picks the log level from the
       response status class. A handler that raises past every exception
       handler is logged as a 500 here, then re-raised for the 500 handler.

Log line example:
    2024-01-15T12:00:00 [INFO] pipeline_demo.access: GET /api/users?page=2 200 1.3ms [a1b2c3d4]

What we log vs what we DON'T log:
    ✅ Log: method, path + query, status, duration, request ID
    ❌ Don't log: request bodies (user names and emails)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from pipeline_demo.middleware.request_id import request_id_var

logger = logging.getLogger("pipeline_demo.access")


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request once it has an outcome.

    Level by status:
        5xx (including unhandled exceptions) → ERROR, 4xx → WARNING, else INFO

    The path is logged the way the 404 envelope echoes it: path plus query.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        query = request.url.query
        target = f"{request.url.path}?{query}" if query else request.url.path

        try:
            response = await call_next(request)
        except Exception:
            self._log(request.method, target, 500, started)
            raise

        self._log(request.method, target, response.status_code, started)
        return response

    @staticmethod
    def _log(method: str, target: str, status: int, started: float) -> None:
        duration_ms = (time.perf_counter() - started) * 1000
        rid = request_id_var.get("")
        logger.log(
            _level_for(status),
            "%s %s %d %.1fms [%s]",
            method,
            target,
            status,
            duration_ms,
            rid,
            extra={"request_id": rid, "status": status, "duration_ms": round(duration_ms, 2)},
        )
