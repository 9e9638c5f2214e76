from taskboard.api.http.health import router as health_router
from taskboard.api.http.auth import router as auth_router
from taskboard.api.http.canvases import router as canvases_router
from taskboard.api.http.shares import router as shares_router, shared_router

__all__ = [
    "health_router",
    "auth_router",
    "canvases_router",
    "shares_router",
    "shared_router"
]
