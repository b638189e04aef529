from fastapi import APIRouter

from asset_api.interfaces.http.routers import assets


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(assets.router, prefix="/assets", tags=["assets"])
    return router


__all__ = [
    "create_api_router",
]
