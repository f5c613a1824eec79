"""Routes handling task CRUD operations for the authenticated owner."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...deps import CurrentUserDependency, require_user_id
from ...models import Task
from ...schemas import MessageResponse, TaskCreate, TaskRead, TaskUpdate
from ...services import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _map_task(task: Task) -> TaskRead:
    return TaskRead.model_validate(task)


@router.get(
    "",
    response_model=list[TaskRead],
    summary="List the caller's tasks, newest first",
)
async def list_tasks(current_user: CurrentUserDependency) -> list[TaskRead]:
    service = TaskService()
    tasks = await service.list_tasks_for_owner(require_user_id(current_user))
    return [_map_task(task) for task in tasks]


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(payload: TaskCreate, current_user: CurrentUserDependency) -> TaskRead:
    service = TaskService()
    task = await service.create_task(
        owner_id=require_user_id(current_user),
        title=payload.title,
        description=payload.description,
        status=payload.status,
        priority=payload.priority,
        due_date=payload.due_date,
    )
    return _map_task(task)


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    summary="Retrieve a task by id",
)
async def get_task(task_id: str, current_user: CurrentUserDependency) -> TaskRead:
    service = TaskService()
    task = await service.get_task_for_owner(task_id, require_user_id(current_user))
    return _map_task(task)


@router.put(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update an existing task",
)
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    current_user: CurrentUserDependency,
) -> TaskRead:
    service = TaskService()
    task = await service.update_task_for_owner(
        task_id,
        require_user_id(current_user),
        payload.model_dump(exclude_unset=True),
    )
    return _map_task(task)


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete a task",
)
async def delete_task(task_id: str, current_user: CurrentUserDependency) -> MessageResponse:
    service = TaskService()
    await service.delete_task_for_owner(task_id, require_user_id(current_user))
    return MessageResponse(message="Task removed")
