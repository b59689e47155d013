"""Recolor placeholder white in SVG markup.

Source "-light" icons paint their recolorable shapes with the placeholder ``#fff``.
Only that exact lowercase 3-digit spelling is replaced; ``#ffffff``, ``#FFF``,
``white`` and ``rgb(...)`` are left alone.
"""

from __future__ import annotations

import re

_RE_HEX6 = re.compile(r"[0-9A-Fa-f]{6}")

_RE_STYLE_ATTR = re.compile(r'style="[^"]*"')
# Look-ahead keeps "#ffffff" from matching on its "#fff" prefix.
_RE_STYLE_FILL = re.compile(r"(?<![\w-])fill:\s*#fff(?![0-9A-Fa-f])")
_RE_STYLE_STOP_COLOR = re.compile(r"stop-color:\s*#fff(?![0-9A-Fa-f])")
_RE_FILL_ATTR = re.compile(r'(?<![\w-])fill="#fff"')
_RE_STOP_COLOR_ATTR = re.compile(r'stop-color="#fff"')


def is_hex_color(color_code: str) -> bool:
    """True for exactly six hex digits, without a leading '#'."""
    return bool(_RE_HEX6.fullmatch(color_code))


def apply_color(svg: str, color_code: str) -> str:
    """Replace placeholder white fills and stop-colors with ``#<color_code>``.

    A malformed ``color_code`` leaves the markup untouched, and markup without a
    placeholder comes back unchanged, so a second pass over colorized output is a
    no-op.
    """
    if not is_hex_color(color_code):
        return svg

    color = f"#{color_code}"

    def _recolor_style(match: re.Match[str]) -> str:
        style = _RE_STYLE_FILL.sub(f"fill:{color}", match.group(0))
        return _RE_STYLE_STOP_COLOR.sub(f"stop-color:{color}", style)

    svg = _RE_STYLE_ATTR.sub(_recolor_style, svg)
    svg = _RE_FILL_ATTR.sub(f'fill="{color}"', svg)
    return _RE_STOP_COLOR_ATTR.sub(f'stop-color="{color}"', svg)


def apply_color_bytes(content: bytes, color_code: str) -> bytes:
    """Byte-level wrapper; bytes that are not valid UTF-8 pass through unchanged."""
    text = content.decode("utf-8", errors="surrogateescape")
    return apply_color(text, color_code).encode("utf-8", errors="surrogateescape")
