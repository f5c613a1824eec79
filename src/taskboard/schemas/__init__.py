"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .auth import AuthResponse, AuthTokens, SigninRequest, SignupRequest
from .system import ErrorResponse, HealthStatus, MessageResponse, ServiceInfo
from .task import TaskCreate, TaskRead, TaskUpdate
from .user import UserPublic

__all__ = [
    "AuthResponse",
    "AuthTokens",
    "ErrorResponse",
    "HealthStatus",
    "MessageResponse",
    "ServiceInfo",
    "SigninRequest",
    "SignupRequest",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "UserPublic",
]
