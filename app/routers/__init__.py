"""Routers package - API endpoint routers."""

from .health import router as health_router
from .applications import router as applications_router
from .logs import router as logs_router

__all__ = [
    "health_router",
    "applications_router",
    "logs_router",
]
