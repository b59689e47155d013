"""Icon source backed by a remote CDN."""

from __future__ import annotations

import httpx

from icon_server.errors import BackendError, SourceStatusError
from icon_server.logger import get_logger

from .base import IconSource

logger = get_logger(__name__)


class RemoteIconSource(IconSource):
    """
    Reads icons over HTTP from ``{base_url}/{path}``.

    ``exists`` and ``fetch`` are independent requests (HEAD then GET); an icon that
    disappears between the two simply surfaces as a failed fetch.
    """

    name = "remote"

    def __init__(self, base_url: str, client: httpx.AsyncClient) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client

    @property
    def location(self) -> str:
        return self._base_url

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{path}"

    async def exists(self, path: str) -> bool:
        url = self.url_for(path)
        try:
            response = await self._client.head(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.debug("remote_head_failed", url=url, error=str(exc))
            return False
        return response.status_code == httpx.codes.OK

    async def fetch(self, path: str) -> bytes:
        url = self.url_for(path)
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise BackendError(f"{type(exc).__name__}: {exc}", location=url) from exc

        if response.status_code != httpx.codes.OK:
            raise SourceStatusError(response.status_code, location=url)
        return response.content

    async def close(self) -> None:
        if not self._client.is_closed:
            await self._client.aclose()
