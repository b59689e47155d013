"""Performance instrumentation middleware.

Captures request latency, the X-Cache outcome and cache activity, and emits a
structured performance log event. The request id is bound into structlog's
context so every log line of the request carries it.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from uuid import uuid4

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from icon_server.core.cache import stats as cache_stats
from icon_server.logger import log_request_performance


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Logs request timing + cache deltas for performance visibility."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path

        if path in ("/", "/health"):
            return await call_next(request)

        request_id = request.headers.get("x-request-id") or str(uuid4())
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        before = cache_stats.snapshot()

        status_code: int = 500
        cache_status: str | None = None
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            cache_status = response.headers.get("x-cache")
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            delta = cache_stats.diff(before, cache_stats.snapshot())
            structlog.contextvars.unbind_contextvars("request_id")

            log_request_performance(
                request_id=request_id,
                method=request.method,
                path=path,
                status_code=status_code,
                duration_ms=duration_ms,
                cache_status=cache_status,
                cache_delta=delta,
            )
