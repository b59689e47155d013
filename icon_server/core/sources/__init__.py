from __future__ import annotations

from icon_server.config import Settings
from icon_server.http_client import create_cdn_client

from .base import IconSource
from .local import LocalIconSource
from .remote import RemoteIconSource


def create_icon_source(settings: Settings) -> IconSource:
    """Build the configured source once at startup."""
    if settings.icon_source == "local":
        return LocalIconSource(settings.local_base_path)
    client = create_cdn_client(timeout=settings.remote_timeout_seconds)
    return RemoteIconSource(settings.remote_base_url, client)


__all__ = [
    "IconSource",
    "LocalIconSource",
    "RemoteIconSource",
    "create_icon_source",
]
