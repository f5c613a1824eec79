"""User documents stored in MongoDB."""

from __future__ import annotations

from beanie import Document, Indexed
from pydantic import ConfigDict, Field, field_validator

from .common import TimestampMixin


class User(Document, TimestampMixin):
    """Persistent user account."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=120)
    email: Indexed(str, unique=True)  # type: ignore[valid-type]
    hashed_password: str

    @field_validator("email", mode="before")
    @classmethod
    def _normalise_email(cls, value: object) -> str:
        return str(value or "").strip().lower()

    class Settings:
        name = "users"


__all__ = ["User"]
