"""
Pastebin Backend - Request Logging Middleware
==============================================

What:  One access-log line per HTTP request: method, path, status, duration,
       request ID, client IP.
How:   Times the downstream call and logs on the `pastebin.access` logger at
       a level chosen from the status class (5xx ERROR, 4xx WARNING, else INFO).
       An exception escaping the route and its handlers is logged with its
       traceback and answered here with a generic JSON 500, so the response
       still passes back through RequestIDMiddleware.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Never logged: request bodies. Paste content is user data and stays out of logs.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from pastebin.exceptions import StorageError
from pastebin.middleware.request_id import request_id_var

logger = logging.getLogger("pastebin.access")

# Probed every few seconds by orchestrators; logging them drowns real traffic
SKIPPED_PATHS = {"/health"}


def _level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs structured information about each HTTP request and response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "[%s] Unhandled error on %s %s",
                request_id_var.get(""),
                request.method,
                path,
                exc_info=True,
            )
            response = JSONResponse(status_code=500, content={"error": StorageError().message})

        if path in SKIPPED_PATHS:
            return response

        duration_ms = (time.perf_counter() - start_time) * 1000

        # request.client is None under some test transports
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        status = response.status_code

        logger.log(
            _level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
