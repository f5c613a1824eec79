"""Router registrations for the task manager API."""

from __future__ import annotations

from fastapi import APIRouter

from .system import router as system_router
from .tasks import router as tasks_router
from .users import router as users_router

# Mounted under the configured API prefix.
api_router = APIRouter()
api_router.include_router(users_router)
api_router.include_router(tasks_router)

__all__ = ["api_router", "system_router"]
