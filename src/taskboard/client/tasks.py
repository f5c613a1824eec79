"""In-memory task list kept in sync with the API for the signed-in user."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from .api import APIError, TaskboardAPI
from .auth import AuthStore
from .models import SignedInUser, TaskRecord
from .views import next_status

logger = logging.getLogger(__name__)

T = TypeVar("T")

FETCH_ERROR = "Error fetching tasks"
CREATE_ERROR = "Error creating task"
UPDATE_ERROR = "Error updating task"
DELETE_ERROR = "Error deleting task"


class TaskStore:
    """Client-side mirror of the signed-in user's tasks.

    Operations are no-ops while nobody is signed in. Each mutation swaps in a
    freshly built list, so references handed out earlier never change.
    """

    def __init__(self, api: TaskboardAPI, user: SignedInUser | None = None) -> None:
        self._api = api
        self._user = user
        self.tasks: list[TaskRecord] = []
        self.loading = False
        self.error: str | None = None

    @property
    def user(self) -> SignedInUser | None:
        return self._user

    def bind(self, auth_store: AuthStore) -> Callable[[], None]:
        """Follow ``auth_store``: re-fetch on sign-in and clear on sign-out."""
        self._user = auth_store.user
        return auth_store.subscribe(self.handle_user_change)

    async def handle_user_change(self, user: SignedInUser | None) -> None:
        self._user = user
        if user is None:
            self.tasks = []
            return
        await self.get_tasks()

    async def get_tasks(self) -> list[TaskRecord] | None:
        user = self._user
        if user is None:
            return None
        tasks = await self._call(lambda: self._api.list_tasks(token=user.token), FETCH_ERROR)
        if tasks is not None:
            self.tasks = tasks
        return tasks

    async def create_task(self, data: Mapping[str, Any]) -> TaskRecord | None:
        user = self._user
        if user is None:
            return None
        task = await self._call(lambda: self._api.create_task(data, token=user.token), CREATE_ERROR)
        if task is not None:
            self.tasks = [task, *self.tasks]
        return task

    async def update_task(self, task_id: str, data: Mapping[str, Any]) -> TaskRecord | None:
        user = self._user
        if user is None:
            return None
        updated = await self._call(
            lambda: self._api.update_task(task_id, data, token=user.token),
            UPDATE_ERROR,
        )
        if updated is not None:
            self.tasks = [updated if task.id == task_id else task for task in self.tasks]
        return updated

    async def delete_task(self, task_id: str) -> bool:
        user = self._user
        if user is None:
            return False
        message = await self._call(lambda: self._api.delete_task(task_id, token=user.token), DELETE_ERROR)
        if message is None:
            return False
        self.tasks = [task for task in self.tasks if task.id != task_id]
        return True

    async def advance_status(self, task: TaskRecord) -> TaskRecord | None:
        """Move ``task`` to the next status in the cycle."""
        return await self.update_task(task.id, {"status": next_status(task.status)})

    async def _call(self, operation: Callable[[], Awaitable[T]], default_error: str) -> T | None:
        self.loading = True
        self.error = None
        try:
            return await operation()
        except APIError as exc:
            self.error = exc.message or default_error
            logger.warning(
                "Task request failed",
                extra={"status_code": exc.status_code, "error": self.error},
            )
            return None
        finally:
            self.loading = False


__all__ = [
    "CREATE_ERROR",
    "DELETE_ERROR",
    "FETCH_ERROR",
    "TaskStore",
    "UPDATE_ERROR",
]
