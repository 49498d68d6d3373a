"""
DelipuCash Backend: Security Headers Middleware
=================================================

What:  Adds hardening and no-cache headers to every response.

Headers:
    X-Content-Type-Options: nosniff              (no MIME sniffing)
    X-Frame-Options: DENY                         (no framing / clickjacking)
    X-XSS-Protection: 1; mode=block               (legacy WebView filters)
    Cache-Control / Pragma / Expires              (counts and flags are live
                                                   state; intermediaries and
                                                   mobile HTTP caches must not
                                                   store them)
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        return response
