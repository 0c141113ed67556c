"""
Response headers middleware.

Every HTTP response gets the usual hardening headers. Responses under
``/api`` also get ``Cache-Control: no-store``: they carry live prices
and ledger state that no proxy or browser should replay. Headers a
route sets itself are left alone. WebSocket traffic is not touched.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

HARDENING_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
}
LIVE_DATA_HEADERS = {"Cache-Control": "no-store"}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds hardening headers, plus no-store on live API responses."""

    def __init__(self, app: ASGIApp, api_prefix: str = "/api") -> None:
        super().__init__(app)
        self.api_prefix = api_prefix

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        headers = dict(HARDENING_HEADERS)
        if request.url.path.startswith(self.api_prefix):
            headers.update(LIVE_DATA_HEADERS)
        for name, value in headers.items():
            response.headers.setdefault(name, value)
        return response
