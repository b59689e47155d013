"""Icon source backed by a mounted filesystem volume."""

from __future__ import annotations

import asyncio
from pathlib import Path

from icon_server.errors import BackendError
from icon_server.logger import get_logger

from .base import IconSource

logger = get_logger(__name__)


def resolve_within(base: Path, relative: str) -> Path | None:
    """Join ``relative`` onto ``base``; ``None`` if the result escapes ``base``
    or is not a usable filesystem path (e.g. an embedded NUL byte)."""
    try:
        root = base.resolve()
        candidate = (root / relative).resolve()
    except ValueError:
        return None
    if candidate != root and root not in candidate.parents:
        return None
    return candidate


class LocalIconSource(IconSource):
    name = "local"

    def __init__(self, base_path: str | Path) -> None:
        self._base = Path(base_path)

    @property
    def location(self) -> str:
        return str(self._base)

    def _path_for(self, path: str) -> Path | None:
        resolved = resolve_within(self._base, path)
        if resolved is None:
            logger.warning("local_path_rejected", base=str(self._base), path=path)
        return resolved

    async def exists(self, path: str) -> bool:
        target = self._path_for(path)
        if target is None:
            return False
        try:
            await asyncio.to_thread(target.stat)
        except OSError:
            return False
        return True

    async def fetch(self, path: str) -> bytes:
        target = self._path_for(path)
        if target is None:
            raise BackendError("Path escapes icon directory", location=path)
        try:
            return await asyncio.to_thread(target.read_bytes)
        except OSError as exc:
            raise BackendError(
                f"{type(exc).__name__}: {exc.strerror or exc}", location=str(target)
            ) from exc
