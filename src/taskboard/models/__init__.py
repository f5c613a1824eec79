"""Document models exposed for the task manager."""

from __future__ import annotations

from .common import TimestampMixin, ensure_utc, utcnow
from .enums import PRIORITY_RANK, TaskPriority, TaskStatus
from .task import Task
from .user import User

DOCUMENT_MODELS = [User, Task]

__all__ = [
    "DOCUMENT_MODELS",
    "PRIORITY_RANK",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "TimestampMixin",
    "User",
    "ensure_utc",
    "utcnow",
]
