"""Client data layer for the task manager API."""

from __future__ import annotations

from .api import APIError, TaskboardAPI
from .auth import AuthStore, FileCredentialStorage, MemoryCredentialStorage
from .config import ClientSettings, get_client_settings
from .forms import LoginForm, RegisterForm, TaskForm
from .models import SignedInUser, TaskRecord, UserProfile
from .tasks import TaskStore
from .views import (
    TaskListQuery,
    TaskStats,
    compute_task_stats,
    filter_and_sort_tasks,
    next_status,
    recent_tasks,
)

__all__ = [
    "APIError",
    "AuthStore",
    "ClientSettings",
    "FileCredentialStorage",
    "LoginForm",
    "MemoryCredentialStorage",
    "RegisterForm",
    "SignedInUser",
    "TaskForm",
    "TaskListQuery",
    "TaskRecord",
    "TaskStats",
    "TaskStore",
    "TaskboardAPI",
    "UserProfile",
    "compute_task_stats",
    "filter_and_sort_tasks",
    "get_client_settings",
    "next_status",
    "recent_tasks",
]
