"""
DelipuCash Backend: Request ID Middleware
===========================================

What:  Assigns a correlation ID to each incoming request and echoes it back.
Why:   Every log line and error body for one request carries the same ID,
       so a client-reported requestId finds the matching server logs.

Client-supplied IDs:
    The mobile app may send its own X-Request-ID. It is reused only when it
    is a short token of letters, digits, '.', '_' or '-'; anything else
    (over-long values, spaces, control characters) is replaced by a fresh
    ID so it cannot be used to forge or flood log lines.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_request_id(client_value: Optional[str]) -> str:
    """Reuse a well-formed client ID, otherwise mint an 8-char one."""
    if client_value and _CLIENT_ID_PATTERN.fullmatch(client_value):
        return client_value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
