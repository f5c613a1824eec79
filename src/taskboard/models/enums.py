"""Enumerations shared by the API and the client."""

from __future__ import annotations

from enum import Enum


class TaskStatus(str, Enum):
    """Enumeration of possible task states."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Enumeration of task priorities, ordered by :data:`PRIORITY_RANK`."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


PRIORITY_RANK: dict[TaskPriority, int] = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
}


__all__ = ["PRIORITY_RANK", "TaskPriority", "TaskStatus"]
