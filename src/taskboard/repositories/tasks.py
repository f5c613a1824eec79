"""Repository for interacting with task documents."""

from __future__ import annotations

from beanie import PydanticObjectId

from ..models import Task
from .base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Concrete repository encapsulating ``Task`` persistence operations."""

    def __init__(self) -> None:
        super().__init__(Task)

    async def list_for_owner(self, owner_id: PydanticObjectId) -> list[Task]:
        """Return all tasks owned by ``owner_id``, newest first."""
        return await Task.find(Task.owner_id == owner_id).sort("-created_at").to_list()
