"""Abstract icon source.

A source only knows how to turn a logical path such as ``"svg/logo.svg"`` into bytes.
Icon naming, formats and fallbacks are the resolver's business.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IconSource(ABC):
    """Provider of raw icon bytes by logical path."""

    #: Short label used in logs ("local" or "remote").
    name: str = "unknown"

    @property
    @abstractmethod
    def location(self) -> str:
        """Base directory or URL the source reads from."""

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Whether ``path`` is available. Never raises."""

    @abstractmethod
    async def fetch(self, path: str) -> bytes:
        """
        Read the whole content at ``path``.

        Raises:
            BackendError: On any filesystem/transport failure or non-OK response.
        """

    async def close(self) -> None:
        """Release resources held by the source."""
        return None
