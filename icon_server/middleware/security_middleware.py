"""Security headers middleware."""

from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

_DOCS_PATHS = ("/docs", "/redoc")

# SVG documents can carry scripts; served icons may only style themselves.
_ICON_CSP = "default-src 'none'; style-src 'unsafe-inline'; img-src data:; sandbox"

_DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "img-src 'self' data: https:; "
    "frame-src 'none'"
)


class SecurityMiddleware(BaseHTTPMiddleware):
    """Security headers middleware (equivalent to helmet.js)."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Icons are embedded cross-origin by dashboards
        response.headers["Cross-Origin-Resource-Policy"] = "cross-origin"

        if request.url.path in _DOCS_PATHS or request.url.path == "/openapi.json":
            response.headers["Content-Security-Policy"] = _DOCS_CSP
        else:
            response.headers["Content-Security-Policy"] = _ICON_CSP

        return response
