"""Main API router."""

from fastapi import APIRouter

from icon_server.routers.icons import router as icons_router

api_router = APIRouter()
api_router.include_router(icons_router, tags=["icons"])
