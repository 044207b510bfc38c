"""Routers package for the taskdesk API."""

from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .health import router as health_router
from .tasks import router as tasks_router
from .users import router as users_router

__all__ = ["auth_router", "dashboard_router", "health_router", "tasks_router", "users_router"]
