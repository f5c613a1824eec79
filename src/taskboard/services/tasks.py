"""Service layer encapsulating task-related operations."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from beanie import PydanticObjectId
from bson.errors import InvalidId

from ..errors import NotAuthorizedError, NotFoundError
from ..models import Task, TaskPriority, TaskStatus
from ..repositories import TaskRepository

logger = logging.getLogger(__name__)

# Fields that keep their stored value when an update sends ``null``.
_NON_NULLABLE_FIELDS = frozenset({"title", "status", "priority"})
_UPDATABLE_FIELDS = frozenset({"title", "description", "status", "priority", "due_date"})


class TaskNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("Task not found")


class TaskOwnershipError(NotAuthorizedError):
    def __init__(self) -> None:
        super().__init__("Not authorized")


def parse_task_id(raw: str | PydanticObjectId) -> PydanticObjectId:
    """Return ``raw`` as an ObjectId, treating malformed identifiers as missing tasks."""
    if isinstance(raw, PydanticObjectId):
        return raw
    try:
        return PydanticObjectId(raw)
    except (InvalidId, TypeError) as exc:
        raise TaskNotFoundError() from exc


class TaskService:
    """High-level business orchestration for ``Task`` documents.

    Every single-task operation goes through :meth:`get_task_for_owner`, which
    loads the task, raises :class:`TaskNotFoundError` when it is missing and
    :class:`TaskOwnershipError` when ``owner_id`` does not match the stored owner.
    """

    def __init__(self) -> None:
        self._repository = TaskRepository()

    async def list_tasks_for_owner(self, owner_id: PydanticObjectId) -> list[Task]:
        """Return every task owned by ``owner_id``, newest first."""
        return await self._repository.list_for_owner(owner_id)

    async def create_task(
        self,
        *,
        owner_id: PydanticObjectId,
        title: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.PENDING,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: datetime | None = None,
    ) -> Task:
        """Create a new task belonging to ``owner_id``."""
        task = Task(
            owner_id=owner_id,
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=due_date,
        )
        await self._repository.add(task)
        logger.info("Task created", extra={"task_id": str(task.id), "owner_id": str(owner_id)})
        return task

    async def get_task_for_owner(
        self,
        task_id: str | PydanticObjectId,
        owner_id: PydanticObjectId,
    ) -> Task:
        """Load a task and verify that ``owner_id`` owns it."""
        task = await self._repository.get(parse_task_id(task_id))
        if task is None:
            raise TaskNotFoundError()
        if not task.is_owned_by(owner_id):
            logger.warning(
                "Rejected access to task owned by another user",
                extra={"task_id": str(task.id), "caller_id": str(owner_id)},
            )
            raise TaskOwnershipError()
        return task

    async def update_task_for_owner(
        self,
        task_id: str | PydanticObjectId,
        owner_id: PydanticObjectId,
        changes: Mapping[str, Any],
    ) -> Task:
        """Apply field-level ``changes`` to a task owned by ``owner_id``."""
        task = await self.get_task_for_owner(task_id, owner_id)
        applied = self._apply_task_updates(task, changes)
        if applied:
            await self._repository.save(task)
            logger.info(
                "Task updated",
                extra={"task_id": str(task.id), "fields": sorted(applied)},
            )
        return task

    async def delete_task_for_owner(
        self,
        task_id: str | PydanticObjectId,
        owner_id: PydanticObjectId,
    ) -> None:
        """Delete a task owned by ``owner_id``."""
        task = await self.get_task_for_owner(task_id, owner_id)
        await self._repository.delete(task)
        logger.info("Task deleted", extra={"task_id": str(task.id)})

    @staticmethod
    def _apply_task_updates(task: Task, changes: Mapping[str, Any]) -> set[str]:
        applied: set[str] = set()
        for field_name, value in changes.items():
            if field_name not in _UPDATABLE_FIELDS:
                continue
            if value is None and field_name in _NON_NULLABLE_FIELDS:
                continue
            if field_name == "description" and value is None:
                value = ""
            setattr(task, field_name, value)
            applied.add(field_name)
        return applied


__all__ = ["TaskNotFoundError", "TaskOwnershipError", "TaskService", "parse_task_id"]
