"""Client-side settings powered by ``pydantic-settings``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.config import REPOSITORY_ROOT


def _default_credentials_path() -> Path:
    return Path.home() / ".taskboard" / "credentials.json"


class ClientSettings(BaseSettings):
    """Configuration for :class:`~taskboard.client.api.TaskboardAPI` consumers."""

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_CLIENT_",
        env_file=(REPOSITORY_ROOT / ".env",),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_url: str = Field(default="http://localhost:5001")
    timeout_seconds: float = Field(default=10.0, gt=0)
    credentials_path: Path = Field(default_factory=_default_credentials_path)

    @field_validator("api_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache()
def get_client_settings() -> ClientSettings:
    """Return a cached ``ClientSettings`` instance."""

    return ClientSettings()


__all__ = ["ClientSettings", "get_client_settings"]
