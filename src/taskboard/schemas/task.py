"""Request and response bodies for the /tasks routes."""

from __future__ import annotations

from datetime import datetime

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import TaskPriority, TaskStatus, ensure_utc

TASK_READ_EXAMPLE = {
    "id": "6650c0ffee0ddba11ca7f00d",
    "title": "Book dentist appointment",
    "description": "Ask for the early morning slot.",
    "status": TaskStatus.PENDING.value,
    "priority": TaskPriority.MEDIUM.value,
    "due_date": "2024-06-01T00:00:00Z",
    "owner_id": "6650c0ffee0ddba11ca7beef",
    "created_at": "2024-05-24T12:00:00Z",
    "updated_at": "2024-05-24T12:00:00Z",
}


class TaskCreate(BaseModel):
    """Body of ``POST /tasks``; status and priority fall back to pending and medium."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "title": "Book dentist appointment",
                "description": "Ask for the early morning slot.",
                "priority": TaskPriority.HIGH.value,
                "due_date": "2024-06-01",
            }
        },
    )

    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None)
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    due_date: datetime | None = Field(default=None)

    @field_validator("due_date", mode="after")
    @classmethod
    def _due_date_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)


class TaskUpdate(BaseModel):
    """Payload for partially updating an existing task.

    Omitted fields are left unchanged. ``description`` and ``due_date`` may be
    sent as ``null`` to clear them.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "title": "Book dentist appointment for Monday",
                "status": TaskStatus.IN_PROGRESS.value,
            }
        },
    )

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None)
    status: TaskStatus | None = Field(default=None)
    priority: TaskPriority | None = Field(default=None)
    due_date: datetime | None = Field(default=None)

    @field_validator("due_date", mode="after")
    @classmethod
    def _due_date_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)


class TaskRead(BaseModel):
    """A stored task as returned to its owner."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": TASK_READ_EXAMPLE},
    )

    id: PydanticObjectId
    title: str
    description: str = ""
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None = None
    owner_id: PydanticObjectId
    created_at: datetime
    updated_at: datetime


__all__ = ["TaskCreate", "TaskRead", "TaskUpdate"]
