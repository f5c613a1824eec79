"""Domain service layer package."""

from __future__ import annotations

from .auth import AuthService
from .tasks import TaskNotFoundError, TaskOwnershipError, TaskService
from .users import UserService

__all__ = [
    "AuthService",
    "TaskNotFoundError",
    "TaskOwnershipError",
    "TaskService",
    "UserService",
]
