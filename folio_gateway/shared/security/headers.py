"""
Response headers middleware.

Adds headers to every response:
- X-Content-Type-Options
- X-Frame-Options
- Referrer-Policy
- Content-Security-Policy
- Cache-Control (responses are computed fresh and must not be cached)

No business logic. Pure cross-cutting concern.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

RESPONSE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Cache-Control": "no-store",
}


class ResponseHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that sets fixed headers on every API response.

    Aggregated portfolio data is never cached by the gateway, so
    intermediaries are told not to cache it either.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request and add the fixed headers to its response."""
        response = await call_next(request)
        for header_name, header_value in RESPONSE_HEADERS.items():
            response.headers.setdefault(header_name, header_value)
        return response
