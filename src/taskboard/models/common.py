"""Shared model helpers."""

from __future__ import annotations

from datetime import datetime, timezone

from beanie import Replace, Save, before_event
from pydantic import BaseModel, Field, field_validator


def utcnow() -> datetime:
    """Return a timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


def ensure_utc(timestamp: datetime | None) -> datetime | None:
    """Interpret naive timestamps as UTC."""
    if timestamp is None:
        return None
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


class TimestampMixin(BaseModel):
    """Mixin that provides created/updated timestamp fields for documents."""

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def _coerce_timestamps(cls, value: datetime) -> datetime:
        return ensure_utc(value)  # type: ignore[return-value]

    @before_event(Replace, Save)
    def refresh_updated_at(self) -> None:
        self.updated_at = utcnow()


__all__ = ["TimestampMixin", "ensure_utc", "utcnow"]
