"""Icon resolution: cache front, format fallback and SVG recoloring."""

from __future__ import annotations

from dataclasses import dataclass

from icon_server.errors import BackendError, IconNotFoundError
from icon_server.logger import get_logger

from .cache import MemoryCache, icon_cache_key
from .content_types import SVG_CONTENT_TYPE, content_type_for_format
from .sources import IconSource
from .svg_color import apply_color_bytes

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedIcon:
    content: bytes
    content_type: str
    format: str
    cached: bool = False


def svg_path(icon_name: str) -> str:
    return f"svg/{icon_name}.svg"


def light_variant_path(icon_name: str) -> str:
    return f"svg/{icon_name}-light.svg"


def format_path(icon_name: str, fmt: str) -> str:
    if fmt == "svg":
        return svg_path(icon_name)
    return f"{fmt}/{icon_name}.{fmt}"


class IconResolver:
    """
    Resolve an icon name and optional color to image bytes.

    Lookup order on a cache miss:

    1. Colored request: the ``-light`` SVG variant, recolored. Uncolored request:
       the icon in the standard format.
    2. Whatever step 1 could not produce (absent, backend failure, empty file): the
       plain SVG, served uncolored.

    Successful results are cached under the *requested* key, including a colored
    request that degraded to the plain SVG. That request keeps getting the uncolored
    icon until the entry expires.
    """

    def __init__(self, *, source: IconSource, cache: MemoryCache, standard_format: str) -> None:
        self.source = source
        self.cache = cache
        self.standard_format = standard_format

    def _requested_shape(self, color_code: str) -> tuple[str, str]:
        """Format and content type implied by the request alone."""
        if color_code:
            return "svg", SVG_CONTENT_TYPE
        return self.standard_format, content_type_for_format(self.standard_format)

    async def resolve(self, icon_name: str, color_code: str = "") -> ResolvedIcon:
        """
        Resolve an icon.

        Args:
            icon_name: Icon identifier without extension. Must be non-empty.
            color_code: Empty, or six hex digits without '#'.

        Returns:
            ResolvedIcon with bytes, content type and the format actually served.

        Raises:
            IconNotFoundError: Icon absent (or unreadable) at every location tried.
        """
        cache_key = icon_cache_key(icon_name, color_code)
        fmt, content_type = self._requested_shape(color_code)

        # The key already encodes colored vs default, so the request shape tells us
        # what kind of bytes a hit holds.
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info(
                "icon_cache_hit",
                icon=icon_name,
                color=color_code or None,
                format=fmt,
            )
            return ResolvedIcon(content=cached, content_type=content_type, format=fmt, cached=True)

        if color_code:
            primary_path = light_variant_path(icon_name)
        else:
            primary_path = format_path(icon_name, fmt)

        content = await self._lookup(primary_path)
        if content and color_code:
            content = apply_color_bytes(content, color_code)

        fallback = False
        if not content:
            fallback = True
            fmt, content_type = "svg", SVG_CONTENT_TYPE
            # Fetched unconditionally: a source may refuse HEAD yet serve GET.
            content = await self._fetch(svg_path(icon_name))

        if not content:
            logger.warning(
                "icon_not_found",
                icon=icon_name,
                color=color_code or None,
                source=self.source.name,
                reason="absent at all locations",
            )
            raise IconNotFoundError(icon_name, color_code, reason="absent at all locations")

        self.cache.set(cache_key, content)
        logger.info(
            "icon_resolved",
            icon=icon_name,
            color=color_code or None,
            format=fmt,
            source=self.source.name,
            fallback=fallback,
        )
        return ResolvedIcon(content=content, content_type=content_type, format=fmt)

    async def _lookup(self, path: str) -> bytes | None:
        """Existence check then fetch; any failure means "not here"."""
        if not await self.source.exists(path):
            return None
        return await self._fetch(path)

    async def _fetch(self, path: str) -> bytes | None:
        try:
            return await self.source.fetch(path)
        except BackendError as exc:
            logger.debug(
                "icon_fetch_failed",
                path=path,
                source=self.source.name,
                code=exc.code,
                error=exc.detail,
            )
            return None
