"""
HTTP client factory for the remote icon CDN.

One pooled httpx.AsyncClient is created at startup and shared by every
request that reaches the CDN; the app lifespan closes it on shutdown.
"""

from __future__ import annotations

import httpx

from icon_server.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
CONNECT_TIMEOUT_SECONDS = 10.0
DEFAULT_HEADERS = {"Accept": "image/*,*/*;q=0.8", "User-Agent": "icon-server"}


def create_cdn_client(
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    headers: dict[str, str] | None = None,
    max_connections: int = 100,
    max_keepalive_connections: int = 20,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Create the pooled client used to reach the icon CDN.

    Args:
        timeout: Overall request timeout in seconds
        headers: Optional default headers, merged over DEFAULT_HEADERS
        max_connections: Maximum number of connections
        max_keepalive_connections: Maximum number of keepalive connections
        transport: Optional transport override (tests use httpx.MockTransport)

    Returns:
        httpx.AsyncClient: A new client instance
    """
    limits = httpx.Limits(
        max_connections=max_connections,
        max_keepalive_connections=max_keepalive_connections,
        keepalive_expiry=30.0,
    )
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(timeout, connect=min(timeout, CONNECT_TIMEOUT_SECONDS)),
        headers={**DEFAULT_HEADERS, **(headers or {})},
        limits=limits,
        follow_redirects=True,
        http2=True,  # Enable HTTP/2 for multiplexing
        transport=transport,
    )
    logger.info(
        "http_client_created",
        timeout=timeout,
        max_connections=limits.max_connections,
        max_keepalive=limits.max_keepalive_connections,
    )
    return client
