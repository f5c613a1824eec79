"""Pydantic models mirroring the API payloads consumed by the client."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from ..models.common import ensure_utc
from ..models.enums import TaskPriority, TaskStatus


class TaskRecord(BaseModel):
    """A task as held in the client's in-memory list."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    owner_id: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _default_description(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("due_date", "created_at", "updated_at", mode="after")
    @classmethod
    def _coerce_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)


class SignedInUser(BaseModel):
    """The signed-in identity together with its bearer credential."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: EmailStr
    token: str = Field(repr=False)


class UserProfile(BaseModel):
    """Profile payload returned by ``GET /api/users/profile``."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    email: EmailStr
    created_at: datetime

    @field_validator("created_at", mode="after")
    @classmethod
    def _coerce_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)  # type: ignore[return-value]


__all__ = ["SignedInUser", "TaskRecord", "UserProfile"]
