"""FastAPI dependencies exposing the per-app core instances."""

from fastapi import Request

from icon_server.config import Settings
from icon_server.core.custom_assets import CustomAssetResolver
from icon_server.core.resolver import IconResolver


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_icon_resolver(request: Request) -> IconResolver:
    return request.app.state.icon_resolver


def get_custom_asset_resolver(request: Request) -> CustomAssetResolver:
    return request.app.state.custom_asset_resolver
