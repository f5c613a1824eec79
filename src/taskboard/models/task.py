"""Task documents stored in MongoDB."""

from __future__ import annotations

from datetime import datetime

import pymongo
from beanie import Document, PydanticObjectId
from pydantic import ConfigDict, Field, field_validator
from pymongo import IndexModel

from .common import TimestampMixin, ensure_utc
from .enums import TaskPriority, TaskStatus


class Task(Document, TimestampMixin):
    """Persistent task owned by exactly one user."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=255)
    description: str = Field(default="")
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    due_date: datetime | None = Field(default=None)
    owner_id: PydanticObjectId

    @field_validator("description", mode="before")
    @classmethod
    def _default_description(cls, value: object) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("due_date", mode="after")
    @classmethod
    def _coerce_due_date(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)

    def is_owned_by(self, user_id: PydanticObjectId) -> bool:
        return self.owner_id == user_id

    class Settings:
        name = "tasks"
        indexes = [
            IndexModel(
                [("owner_id", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)],
                name="tasks_owner_created_at",
            ),
        ]


__all__ = ["Task"]
