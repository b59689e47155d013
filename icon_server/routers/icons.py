"""Icon endpoints.

Routes:
    /custom/{filename}          user supplied asset
    /{icon_name}.svg?color=...  legacy query-string color
    /{icon_name}                icon in the standard format
    /{icon_name}/{color_code}   recolored SVG
"""

from fastapi import APIRouter, Depends, Response

from icon_server.core.custom_assets import CustomAssetResolver
from icon_server.core.resolver import IconResolver, ResolvedIcon
from icon_server.core.svg_color import is_hex_color
from icon_server.dependencies import get_custom_asset_resolver, get_icon_resolver
from icon_server.errors import InvalidInputError
from icon_server.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _icon_response(icon: ResolvedIcon) -> Response:
    return Response(
        content=icon.content,
        media_type=icon.content_type,
        headers={"X-Cache": "HIT" if icon.cached else "MISS"},
    )


def _require_icon_name(icon_name: str) -> str:
    if not icon_name.strip():
        raise InvalidInputError("Icon name is required")
    return icon_name


@router.get("/custom/{filename}", summary="Serve a custom icon")
async def custom_icon(
    filename: str,
    resolver: CustomAssetResolver = Depends(get_custom_asset_resolver),
) -> Response:
    if not filename.strip():
        raise InvalidInputError("Filename is required")
    asset = await resolver.resolve(filename)
    return Response(content=asset.content, media_type=asset.content_type)


@router.get("/{icon_name}.svg", summary="Serve an icon (legacy query-string color)")
async def legacy_icon(
    icon_name: str,
    color: str | None = None,
    resolver: IconResolver = Depends(get_icon_resolver),
) -> Response:
    """Old URL style. An unusable ``color`` is ignored rather than rejected."""
    color_code = ""
    if color:
        candidate = color.strip().removeprefix("#")
        if is_hex_color(candidate):
            color_code = candidate
    icon = await resolver.resolve(_require_icon_name(icon_name), color_code)
    return _icon_response(icon)


@router.get("/{icon_name}", summary="Serve an icon in the standard format")
@router.get("/{icon_name}/{color_code}", summary="Serve a recolored SVG icon")
async def get_icon(
    icon_name: str,
    color_code: str = "",
    resolver: IconResolver = Depends(get_icon_resolver),
) -> Response:
    """
    Serve an icon.

    Args:
        icon_name: Icon identifier without extension
        color_code: Optional six hex digits without '#'

    Returns:
        The icon bytes with their content type, or 400/404 error bodies.
    """
    icon_name = _require_icon_name(icon_name)
    if color_code and not is_hex_color(color_code):
        logger.error("invalid_color_code", icon=icon_name, color=color_code)
        raise InvalidInputError("Invalid color code. Use 6-digit hex without #")
    icon = await resolver.resolve(icon_name, color_code)
    return _icon_response(icon)
