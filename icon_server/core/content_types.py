"""MIME types for served icon formats and custom asset extensions."""

from __future__ import annotations

import os

SVG_CONTENT_TYPE = "image/svg+xml"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

FORMAT_CONTENT_TYPES: dict[str, str] = {
    "svg": SVG_CONTENT_TYPE,
    "png": "image/png",
    "webp": "image/webp",
    "avif": "image/avif",
    "ico": "image/x-icon",
}

EXTENSION_CONTENT_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": SVG_CONTENT_TYPE,
    ".webp": "image/webp",
    ".avif": "image/avif",
    ".ico": "image/x-icon",
}


def content_type_for_format(fmt: str) -> str:
    """Content type of a standard icon format (one of ``SUPPORTED_FORMATS``)."""
    return FORMAT_CONTENT_TYPES[fmt]


def content_type_for_filename(filename: str) -> str:
    """Content type inferred from a filename's extension (case-insensitive)."""
    _, ext = os.path.splitext(filename)
    return EXTENSION_CONTENT_TYPES.get(ext.lower(), DEFAULT_CONTENT_TYPE)
