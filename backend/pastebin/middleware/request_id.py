"""
Pastebin Backend - Request ID Middleware
=========================================

What:  Assigns every request a short correlation ID and returns it in the
       X-Request-ID response header.
How:   Reuses a well-formed client-supplied X-Request-ID, otherwise generates
       one. The ID is stored in a ContextVar so loggers and exception
       handlers can read it without access to the request object.
Who:   Applied to every request via Starlette middleware.
"""

import re
import secrets
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client IDs end up in log lines; accept only short, printable tokens
_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def new_request_id() -> str:
    """8 hex characters, enough to correlate log lines of one request."""
    return secrets.token_hex(4)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Client sent a valid X-Request-ID → use it
        2. Otherwise → generate a new 8-character ID
        3. Store in the ContextVar and in request.state.request_id
        4. Echo it in the X-Request-ID response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        client_rid = request.headers.get("X-Request-ID", "")
        rid = client_rid if _CLIENT_ID_PATTERN.match(client_rid) else new_request_id()

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
