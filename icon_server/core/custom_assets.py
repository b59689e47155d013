"""Lookup of user supplied assets in the custom directory.

No caching, no fallback and no recoloring: the filename is looked up as given.
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path

from icon_server.errors import AssetNotFoundError, AssetReadError
from icon_server.logger import get_logger

from .content_types import content_type_for_filename
from .sources.local import resolve_within

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedAsset:
    filename: str
    content: bytes
    content_type: str


class CustomAssetResolver:
    def __init__(self, base_path: str | Path) -> None:
        self.base_path = Path(base_path)

    async def resolve(self, filename: str) -> ResolvedAsset:
        target = resolve_within(self.base_path, filename)
        logger.debug("custom_icon_lookup", path=str(target or self.base_path / filename))

        if target is None or not await asyncio.to_thread(target.exists):
            await self._log_directory_contents()
            logger.warning("custom_icon_not_found", asset=filename, base=str(self.base_path))
            raise AssetNotFoundError(filename)

        try:
            content = await asyncio.to_thread(target.read_bytes)
        except OSError as exc:
            logger.error("custom_icon_read_failed", asset=filename, error=str(exc))
            raise AssetReadError(filename) from exc

        content_type = content_type_for_filename(filename)
        logger.info("custom_icon_served", asset=filename, content_type=content_type)
        return ResolvedAsset(filename=filename, content=content, content_type=content_type)

    async def _log_directory_contents(self) -> None:
        try:
            names = sorted(await asyncio.to_thread(os.listdir, self.base_path))
        except OSError as exc:
            logger.debug("custom_dir_unreadable", base=str(self.base_path), error=str(exc))
            return
        logger.debug("custom_dir_contents", base=str(self.base_path), files=names)
