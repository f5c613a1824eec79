from __future__ import annotations

from datetime import datetime

import pytest
from httpx import AsyncClient

from taskboard.models import TaskPriority, TaskStatus

pytestmark = pytest.mark.asyncio

MISSING_TASK_ID = "6650c0ffee0ddba11ca7f00d"


async def _create_task(client: AsyncClient, headers: dict[str, str], **payload) -> dict:
    payload.setdefault("title", "Write release notes")
    response = await client.post("/api/tasks", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_task_crud_flow(client: AsyncClient, signup) -> None:
    user, headers = await signup()

    created = await _create_task(
        client,
        headers,
        title="Draft roadmap",
        description="Outline the next quarter.",
        priority=TaskPriority.HIGH.value,
        due_date="2030-01-15",
    )
    assert created["owner_id"] == user["id"]
    assert created["status"] == TaskStatus.PENDING.value
    assert created["priority"] == TaskPriority.HIGH.value
    assert datetime.fromisoformat(created["due_date"]).year == 2030

    detail = await client.get(f"/api/tasks/{created['id']}", headers=headers)
    assert detail.status_code == 200
    assert detail.json()["title"] == "Draft roadmap"

    updated = await client.put(
        f"/api/tasks/{created['id']}",
        json={"status": TaskStatus.IN_PROGRESS.value},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == TaskStatus.IN_PROGRESS.value
    assert updated.json()["title"] == "Draft roadmap"

    deleted = await client.delete(f"/api/tasks/{created['id']}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Task removed"}

    missing = await client.get(f"/api/tasks/{created['id']}", headers=headers)
    assert missing.status_code == 404


async def test_create_task_applies_defaults(client: AsyncClient, signup) -> None:
    _, headers = await signup()

    created = await _create_task(client, headers, title="  Water plants  ")

    assert created["title"] == "Water plants"
    assert created["description"] == ""
    assert created["status"] == TaskStatus.PENDING.value
    assert created["priority"] == TaskPriority.MEDIUM.value
    assert created["due_date"] is None


async def test_create_task_rejects_blank_title(client: AsyncClient, signup) -> None:
    _, headers = await signup()

    response = await client.post("/api/tasks", json={"title": "   "}, headers=headers)

    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


async def test_create_task_rejects_unknown_status(client: AsyncClient, signup) -> None:
    _, headers = await signup()

    response = await client.post(
        "/api/tasks",
        json={"title": "Odd", "status": "archived"},
        headers=headers,
    )

    assert response.status_code == 422


async def test_list_returns_only_callers_tasks_newest_first(client: AsyncClient, signup) -> None:
    _, owner_headers = await signup(email="owner@example.com")
    _, other_headers = await signup(name="Other", email="other@example.com")

    for title in ("First", "Second", "Third"):
        await _create_task(client, owner_headers, title=title)
    await _create_task(client, other_headers, title="Not yours")

    response = await client.get("/api/tasks", headers=owner_headers)

    assert response.status_code == 200
    tasks = response.json()
    assert {task["title"] for task in tasks} == {"First", "Second", "Third"}
    created = [datetime.fromisoformat(task["created_at"]) for task in tasks]
    assert created == sorted(created, reverse=True)


async def test_tasks_require_authentication(client: AsyncClient) -> None:
    response = await client.get("/api/tasks")

    assert response.status_code == 401
    assert response.json()["code"] == "not_authorized"


@pytest.mark.parametrize(
    ("method", "body"),
    [("GET", None), ("PUT", {"title": "Hijacked"}), ("DELETE", None)],
)
async def test_non_owner_is_not_authorized(client: AsyncClient, signup, method: str, body) -> None:
    _, owner_headers = await signup(email="owner@example.com")
    _, intruder_headers = await signup(name="Intruder", email="intruder@example.com")
    task = await _create_task(client, owner_headers, title="Private")

    response = await client.request(
        method,
        f"/api/tasks/{task['id']}",
        json=body,
        headers=intruder_headers,
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Not authorized"

    untouched = await client.get(f"/api/tasks/{task['id']}", headers=owner_headers)
    assert untouched.status_code == 200
    assert untouched.json()["title"] == "Private"


@pytest.mark.parametrize("task_id", [MISSING_TASK_ID, "not-an-object-id"])
@pytest.mark.parametrize(
    ("method", "body"),
    [("GET", None), ("PUT", {"title": "Ghost"}), ("DELETE", None)],
)
async def test_missing_task_is_not_found(
    client: AsyncClient,
    signup,
    task_id: str,
    method: str,
    body,
) -> None:
    _, headers = await signup()

    response = await client.request(method, f"/api/tasks/{task_id}", json=body, headers=headers)

    assert response.status_code == 404
    payload = response.json()
    assert payload["code"] == "not_found"
    assert payload["message"] == "Task not found"


async def test_update_null_semantics(client: AsyncClient, signup) -> None:
    _, headers = await signup()
    task = await _create_task(
        client,
        headers,
        title="Keep me",
        description="Some notes",
        priority=TaskPriority.LOW.value,
        due_date="2030-05-01T09:30:00Z",
    )

    response = await client.put(
        f"/api/tasks/{task['id']}",
        json={"title": None, "status": None, "priority": None, "description": None, "due_date": None},
        headers=headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Keep me"
    assert body["status"] == TaskStatus.PENDING.value
    assert body["priority"] == TaskPriority.LOW.value
    assert body["description"] == ""
    assert body["due_date"] is None


async def test_empty_update_is_a_no_op(client: AsyncClient, signup) -> None:
    _, headers = await signup()
    task = await _create_task(client, headers, title="Stable", description="Unchanged")
    stored = (await client.get(f"/api/tasks/{task['id']}", headers=headers)).json()

    response = await client.put(f"/api/tasks/{task['id']}", json={}, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Stable"
    assert body["description"] == "Unchanged"
    assert body["updated_at"] == stored["updated_at"]


async def test_update_cannot_change_owner(client: AsyncClient, signup) -> None:
    user, headers = await signup(email="owner@example.com")
    other, _ = await signup(name="Other", email="other@example.com")
    task = await _create_task(client, headers, title="Mine")

    response = await client.put(
        f"/api/tasks/{task['id']}",
        json={"owner_id": other["id"], "title": "Still mine"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["owner_id"] == user["id"]
    assert response.json()["title"] == "Still mine"


async def test_update_refreshes_updated_at(client: AsyncClient, signup) -> None:
    _, headers = await signup()
    task = await _create_task(client, headers, title="Timestamped")
    stored = (await client.get(f"/api/tasks/{task['id']}", headers=headers)).json()

    response = await client.put(
        f"/api/tasks/{task['id']}",
        json={"status": TaskStatus.COMPLETED.value},
        headers=headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert datetime.fromisoformat(body["updated_at"]) >= datetime.fromisoformat(stored["updated_at"])
    assert body["created_at"] == stored["created_at"]
