"""
FastAPI application for the icon server.

Serves icons by name from a local volume or a remote CDN, optionally recolored,
fronted by an in-memory cache.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from icon_server import __version__
from icon_server.config import Settings, settings
from icon_server.core.cache import MemoryCache
from icon_server.core.custom_assets import CustomAssetResolver
from icon_server.core.resolver import IconResolver
from icon_server.core.sources import IconSource, create_icon_source
from icon_server.errors import IconServerError
from icon_server.logger import get_logger, setup_logging
from icon_server.middleware import AccessLogMiddleware, PerformanceMiddleware, SecurityMiddleware
from icon_server.routers import api_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown."""
    logger = get_logger(__name__)
    app_settings: Settings = app.state.settings
    source: IconSource = app.state.icon_source

    logger.info(
        "icon_server_starting",
        port=app_settings.port,
        source="Local volume" if app_settings.icon_source == "local" else "Remote CDN",
        location=source.location,
        standard_format=app_settings.standard_icon_format,
        cache_ttl_seconds=int(app_settings.cache_ttl_seconds),
        cache_max_entries=app_settings.cache_max_entries,
    )

    yield

    logger.info("icon_server_shutting_down")
    await source.close()
    logger.info("icon_server_shutdown_complete")


def create_app(app_settings: Settings | None = None, *, source: IconSource | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The cache, icon source and resolvers are built here once and live on
    ``app.state``; request handlers reach them through dependencies.

    Args:
        app_settings: Configuration; defaults to the environment-loaded settings.
        source: Icon source override; defaults to the one selected by configuration.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.debug)

    app = FastAPI(
        title=app_settings.app_name,
        description="Self-hosted icon server",
        version=__version__,
        lifespan=lifespan,
    )

    icon_source = source or create_icon_source(app_settings)
    cache = MemoryCache(
        ttl_seconds=app_settings.cache_ttl_seconds,
        max_entries=app_settings.cache_max_entries,
    )
    app.state.settings = app_settings
    app.state.icon_source = icon_source
    app.state.icon_cache = cache
    app.state.icon_resolver = IconResolver(
        source=icon_source,
        cache=cache,
        standard_format=app_settings.standard_icon_format,
    )
    app.state.custom_asset_resolver = CustomAssetResolver(app_settings.custom_path)

    @app.exception_handler(IconServerError)
    async def _icon_error_handler(_request: Request, exc: IconServerError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    # Middleware executes in reverse order of registration; the access log wraps everything.
    app.add_middleware(PerformanceMiddleware)
    app.add_middleware(SecurityMiddleware)
    app.add_middleware(AccessLogMiddleware)

    # Registered before the catch-all icon routes
    @app.get("/")
    async def root():
        """Server info."""
        return {
            "server": "Self-hosted icon server",
            "version": __version__,
            "urlFormat": "https://subdomain.example.com/iconname/colorcode",
            "features": {**app_settings.describe(), "cachedItems": len(cache)},
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(api_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    uvicorn.run("icon_server.main:app", host="0.0.0.0", port=settings.port)
