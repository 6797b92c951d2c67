"""API routers."""

from src.routers.content import router as content_router
from src.routers.health import router as health_router
from src.routers.user_content import router as user_content_router

__all__ = [
    "health_router",
    "user_content_router",
    "content_router",
]
