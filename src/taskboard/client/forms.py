"""Form state and validation run before any request is sent."""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from ..models.enums import TaskPriority, TaskStatus
from .models import TaskRecord

_EMAIL_SHAPE = re.compile(r"\S+@\S+\.\S+")

MIN_PASSWORD_LENGTH = 6


@dataclass
class TaskForm:
    """Editable task fields; ``due_date`` uses the ``YYYY-MM-DD`` format."""

    title: str = ""
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    due_date: str = ""
    editing: bool = False
    errors: dict[str, str] = field(default_factory=dict)
    submitting: bool = False

    @classmethod
    def from_task(cls, task: TaskRecord) -> "TaskForm":
        return cls(
            title=task.title,
            description=task.description,
            priority=task.priority,
            status=task.status,
            due_date=task.due_date.date().isoformat() if task.due_date else "",
            editing=True,
        )

    def validate(self) -> bool:
        errors: dict[str, str] = {}
        if not self.title.strip():
            errors["title"] = "Title is required"
        if self.due_date:
            try:
                date.fromisoformat(self.due_date)
            except ValueError:
                errors["due_date"] = "Due date must use the YYYY-MM-DD format"
        self.errors = errors
        return not errors

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "status": self.status,
        }
        if self.due_date:
            payload["due_date"] = self.due_date
        return payload

    def reset(self) -> None:
        self.title = ""
        self.description = ""
        self.priority = TaskPriority.MEDIUM
        self.status = TaskStatus.PENDING
        self.due_date = ""
        self.errors = {}

    async def submit(self, handler: Callable[[Mapping[str, Any]], Awaitable[Any]]) -> bool:
        """Validate and pass the payload to ``handler``.

        ``handler`` is never called for an invalid form. A create form resets
        to its defaults afterwards; an edit form keeps its values.
        """
        if not self.validate():
            return False
        self.submitting = True
        try:
            await handler(self.to_payload())
        finally:
            self.submitting = False
        if not self.editing:
            self.reset()
        return True


@dataclass
class LoginForm:
    email: str = ""
    password: str = ""
    errors: dict[str, str] = field(default_factory=dict)

    def validate(self) -> bool:
        errors: dict[str, str] = {}
        if not self.email.strip():
            errors["email"] = "Email is required"
        if not self.password:
            errors["password"] = "Password is required"
        self.errors = errors
        return not errors


@dataclass
class RegisterForm:
    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    errors: dict[str, str] = field(default_factory=dict)

    def validate(self) -> bool:
        errors: dict[str, str] = {}
        if not self.name.strip():
            errors["name"] = "Name is required"
        if not self.email.strip():
            errors["email"] = "Email is required"
        elif not _EMAIL_SHAPE.search(self.email):
            errors["email"] = "Email is invalid"
        if not self.password:
            errors["password"] = "Password is required"
        elif len(self.password) < MIN_PASSWORD_LENGTH:
            errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        if self.password != self.confirm_password:
            errors["confirm_password"] = "Passwords do not match"
        self.errors = errors
        return not errors


__all__ = ["LoginForm", "RegisterForm", "TaskForm"]
