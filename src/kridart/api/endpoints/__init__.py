"""API endpoint modules."""

from .assets import router as assets_router
from .auth import router as auth_router
from .chat import router as chat_router
from .projects import router as projects_router
from .system import router as system_router

__all__ = [
    "assets_router",
    "auth_router",
    "chat_router",
    "projects_router",
    "system_router",
]
