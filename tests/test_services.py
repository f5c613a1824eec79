from __future__ import annotations

from datetime import datetime, timezone

import pytest
from beanie import PydanticObjectId

from taskboard.core.config import get_settings
from taskboard.core.security import verify_password
from taskboard.errors import ApplicationError
from taskboard.models import Task, TaskPriority, TaskStatus, User
from taskboard.services import (
    AuthService,
    TaskNotFoundError,
    TaskOwnershipError,
    TaskService,
    UserService,
)
from taskboard.services.tasks import parse_task_id


@pytest.fixture()
async def owner(document_store: None) -> User:
    return await UserService().create_user(name="Owner", email="owner@example.com", password="secret123")


@pytest.fixture()
async def intruder(document_store: None) -> User:
    return await UserService().create_user(name="Intruder", email="intruder@example.com", password="secret123")


async def test_create_user_hashes_password_and_normalises_email(document_store: None) -> None:
    user = await UserService().create_user(name=" Grace ", email=" Grace@Example.COM ", password="secret123")

    assert user.id is not None
    assert user.name == "Grace"
    assert user.email == "grace@example.com"
    assert user.hashed_password != "secret123"
    assert verify_password("secret123", user.hashed_password)


async def test_get_user_loads_by_id_and_misses_unknown_ids(owner: User) -> None:
    service = UserService()

    loaded = await service.get_user(owner.id)

    assert loaded is not None
    assert loaded.email == "owner@example.com"
    assert await service.get_user(PydanticObjectId()) is None


async def test_register_user_rejects_existing_email(owner: User) -> None:
    service = AuthService(get_settings())

    with pytest.raises(ApplicationError) as exc_info:
        await service.register_user(name="Copy", email="OWNER@example.com", password="secret123")

    assert exc_info.value.code == "user_exists"
    assert exc_info.value.status_code == 400


async def test_authenticate_user_checks_password(owner: User) -> None:
    service = AuthService(get_settings())

    authenticated = await service.authenticate_user("owner@example.com", "secret123")
    assert authenticated.id == owner.id

    with pytest.raises(ApplicationError) as exc_info:
        await service.authenticate_user("owner@example.com", "wrong")
    assert exc_info.value.status_code == 401


async def test_create_task_sets_owner_and_defaults(owner: User) -> None:
    task = await TaskService().create_task(owner_id=owner.id, title="Plan sprint")

    assert task.id is not None
    assert task.owner_id == owner.id
    assert task.status is TaskStatus.PENDING
    assert task.priority is TaskPriority.MEDIUM
    assert task.description == ""
    assert task.created_at.tzinfo is not None


async def test_get_task_for_owner_enforces_ownership(owner: User, intruder: User) -> None:
    service = TaskService()
    task = await service.create_task(owner_id=owner.id, title="Secret")

    loaded = await service.get_task_for_owner(str(task.id), owner.id)
    assert loaded.id == task.id

    with pytest.raises(TaskOwnershipError):
        await service.get_task_for_owner(task.id, intruder.id)


async def test_get_task_for_owner_reports_missing_before_ownership(intruder: User) -> None:
    with pytest.raises(TaskNotFoundError):
        await TaskService().get_task_for_owner(PydanticObjectId(), intruder.id)


async def test_update_task_ignores_unknown_and_null_required_fields(owner: User) -> None:
    service = TaskService()
    due = datetime(2031, 3, 1, 12, 0, tzinfo=timezone.utc)
    task = await service.create_task(
        owner_id=owner.id,
        title="Original",
        description="Body",
        due_date=due,
    )

    updated = await service.update_task_for_owner(
        task.id,
        owner.id,
        {"title": None, "priority": TaskPriority.HIGH, "owner_id": PydanticObjectId(), "due_date": None},
    )

    assert updated.title == "Original"
    assert updated.priority is TaskPriority.HIGH
    assert updated.owner_id == owner.id
    assert updated.due_date is None
    assert updated.description == "Body"

    reloaded = await Task.get(task.id)
    assert reloaded is not None
    assert reloaded.priority is TaskPriority.HIGH
    assert reloaded.due_date is None


async def test_delete_task_removes_document(owner: User, intruder: User) -> None:
    service = TaskService()
    task = await service.create_task(owner_id=owner.id, title="Disposable")

    with pytest.raises(TaskOwnershipError):
        await service.delete_task_for_owner(task.id, intruder.id)
    assert await Task.get(task.id) is not None

    await service.delete_task_for_owner(task.id, owner.id)
    assert await Task.get(task.id) is None


async def test_list_tasks_for_owner_filters_by_owner(owner: User, intruder: User) -> None:
    service = TaskService()
    await service.create_task(owner_id=owner.id, title="One")
    await service.create_task(owner_id=owner.id, title="Two")
    await service.create_task(owner_id=intruder.id, title="Theirs")

    tasks = await service.list_tasks_for_owner(owner.id)

    assert sorted(task.title for task in tasks) == ["One", "Two"]


def test_parse_task_id_treats_malformed_ids_as_missing() -> None:
    with pytest.raises(TaskNotFoundError):
        parse_task_id("12345")

    identifier = PydanticObjectId()
    assert parse_task_id(str(identifier)) == identifier
