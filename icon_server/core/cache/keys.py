from __future__ import annotations

from .types import CacheKey

DEFAULT_VARIANT = "default"


def icon_cache_key(icon_name: str, color_code: str = "") -> CacheKey:
    """Cache slot for an icon request.

    Case-sensitive and un-normalised: ``("logo", "AABBCC")`` and ``("logo", "aabbcc")``
    are different slots.
    """
    return f"{icon_name}:{color_code or DEFAULT_VARIANT}"
