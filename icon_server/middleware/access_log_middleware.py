"""Access log middleware for FastAPI application."""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from icon_server.logger import get_logger

logger = get_logger(__name__)

_QUIET_PATHS = ("/", "/health", "/favicon.ico")


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    Access log middleware that logs HTTP requests with timing and content length.

    Produces logs like:
    INFO:     [hostname:pid] http_request client=10.0.0.4:33194 request="GET /github/ff0000 HTTP/1.1" status=200 type=image/svg+xml size=1234B duration=4.2ms
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.perf_counter()
        path = request.url.path

        if path in _QUIET_PATHS:
            return await call_next(request)

        client_host = request.client.host if request.client else "-"
        client_port = request.client.port if request.client else "-"
        query = request.url.query
        full_path = f"{path}?{query}" if query else path
        http_version = request.scope.get("http_version", "1.1")

        response: Response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        content_length = response.headers.get("content-length")

        logger.info(
            "http_request",
            client=f"{client_host}:{client_port}",
            request=f'"{request.method} {full_path} HTTP/{http_version}"',
            status=response.status_code,
            type=response.headers.get("content-type", "-"),
            size=f"{content_length}B" if content_length else "-",
            duration=f"{duration_ms:.1f}ms",
        )

        return response
