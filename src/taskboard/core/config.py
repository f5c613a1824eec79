"""Service settings read from ``TASKBOARD_*`` variables and the repository ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal, NamedTuple

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .. import __version__ as package_version

REPOSITORY_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_TOKEN_MINUTES = 60 * 24 * 30

EnvironmentName = Literal["development", "test", "ci"]
LogFormat = Literal["json", "text"]
CommaSeparated = Annotated[list[str], NoDecode]


class Profile(NamedTuple):
    log_level: str
    log_format: LogFormat
    reload: bool


# Defaults per environment. Values set explicitly (arguments or env vars) win.
PROFILES: dict[EnvironmentName, Profile] = {
    "development": Profile(log_level="DEBUG", log_format="text", reload=True),
    "test": Profile(log_level="WARNING", log_format="json", reload=False),
    "ci": Profile(log_level="INFO", log_format="json", reload=False),
}

_SHORT_NAMES: dict[str, EnvironmentName] = {"dev": "development", "testing": "test"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_",
        env_file=(REPOSITORY_ROOT / ".env",),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_name: str = "Taskboard API"
    environment: EnvironmentName = "development"
    version: str = package_version
    api_prefix: str = "/api"
    app_host: str = "0.0.0.0"
    app_port: int = 5001
    reload: bool = True

    mongo_url: str = "mongodb://localhost:27017"
    mongo_database: str = "taskboard"

    log_level: str = "INFO"
    log_format: LogFormat = "json"

    jwt_secret_key: str = Field(default="change-me", repr=False)
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = DEFAULT_TOKEN_MINUTES

    cors_allow_origins: CommaSeparated = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
    )
    cors_allow_credentials: bool = True
    cors_allow_methods: CommaSeparated = Field(default_factory=lambda: ["GET", "POST", "PUT", "DELETE"])
    cors_allow_headers: CommaSeparated = Field(default_factory=lambda: ["Content-Type", "Authorization"])

    @field_validator("environment", mode="before")
    @classmethod
    def _resolve_environment(cls, value: object) -> EnvironmentName:
        """Accept short names and any casing; unknown names fall back to development."""
        name = value.strip().lower() if isinstance(value, str) else ""
        name = _SHORT_NAMES.get(name, name)
        return name if name in PROFILES else "development"  # type: ignore[return-value]

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_commas(cls, value: object) -> list[str]:
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, (list, tuple)):
            return []
        return [str(item).strip() for item in value if str(item).strip()]

    @field_validator("access_token_expire_minutes", mode="before")
    @classmethod
    def _at_least_one_minute(cls, value: object) -> int:
        try:
            return max(int(value), 1)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return DEFAULT_TOKEN_MINUTES

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> str:
        return value.strip().upper() if isinstance(value, str) else "INFO"

    @model_validator(mode="after")
    def _fill_from_profile(self) -> "Settings":
        for field_name, value in PROFILES[self.environment]._asdict().items():
            if field_name not in self.model_fields_set:
                setattr(self, field_name, value)
        return self


@lru_cache()
def get_settings() -> Settings:
    return Settings()
