"""Payloads for the banner, liveness and error responses."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class ServiceInfo(BaseModel):
    message: str = Field(description="Banner confirming the API is up")
    name: str
    environment: str
    version: str
    api_prefix: str = Field(description="Mount point of the /users and /tasks routes")


class HealthStatus(BaseModel):
    status: Literal["ok"] = "ok"


class MessageResponse(BaseModel):
    """Plain acknowledgement payload."""

    message: str


class ErrorResponse(BaseModel):
    """Envelope shared by every failed request.

    ``details`` carries the request id plus any error-specific context such as
    the list of validation errors.
    """

    code: str
    message: str
    details: Any | None = None


__all__ = ["ErrorResponse", "HealthStatus", "MessageResponse", "ServiceInfo"]
