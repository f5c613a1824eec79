"""Signed-in user state with persistent credential storage."""

from __future__ import annotations

import inspect
import json
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from .api import APIError, TaskboardAPI
from .models import SignedInUser

logger = logging.getLogger(__name__)

UserListener = Callable[[SignedInUser | None], Awaitable[None] | None]

LOGIN_ERROR = "An error occurred during login"
REGISTER_ERROR = "An error occurred during registration"


class CredentialStorage(Protocol):
    def load(self) -> SignedInUser | None: ...

    def save(self, user: SignedInUser) -> None: ...

    def clear(self) -> None: ...


class MemoryCredentialStorage:
    """Keeps the signed-in user for the lifetime of the process only."""

    def __init__(self, user: SignedInUser | None = None) -> None:
        self._user = user

    def load(self) -> SignedInUser | None:
        return self._user

    def save(self, user: SignedInUser) -> None:
        self._user = user

    def clear(self) -> None:
        self._user = None


class FileCredentialStorage:
    """Persists the signed-in user as JSON so it survives restarts."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> SignedInUser | None:
        if not self.path.exists():
            return None
        try:
            return SignedInUser.model_validate(json.loads(self.path.read_text(encoding="utf-8")))
        except (ValueError, ValidationError):
            logger.warning("Discarding unreadable credentials file", extra={"path": str(self.path)})
            self.clear()
            return None

    def save(self, user: SignedInUser) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(user.model_dump_json(), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class AuthStore:
    """Holds the signed-in user and notifies listeners whenever it changes."""

    def __init__(self, api: TaskboardAPI, storage: CredentialStorage | None = None) -> None:
        self._api = api
        self._storage: CredentialStorage = storage or MemoryCredentialStorage()
        self._listeners: list[UserListener] = []
        self.user: SignedInUser | None = None
        self.loading = False
        self.error: str | None = None

    def subscribe(self, listener: UserListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def restore(self) -> SignedInUser | None:
        """Load a previously persisted user, if any."""

        user = self._storage.load()
        if user is not None:
            await self._set_user(user)
        return user

    async def login(self, email: str, password: str) -> None:
        await self._authenticate(
            lambda: self._api.signin(email=email, password=password),
            default_error=LOGIN_ERROR,
        )

    async def register(self, name: str, email: str, password: str) -> None:
        await self._authenticate(
            lambda: self._api.signup(name=name, email=email, password=password),
            default_error=REGISTER_ERROR,
        )

    async def logout(self) -> None:
        self._storage.clear()
        await self._set_user(None)

    async def _authenticate(
        self,
        call: Callable[[], Awaitable[SignedInUser]],
        *,
        default_error: str,
    ) -> None:
        self.loading = True
        self.error = None
        try:
            user = await call()
        except APIError as exc:
            self.error = exc.message or default_error
            return
        finally:
            self.loading = False
        self._storage.save(user)
        await self._set_user(user)

    async def _set_user(self, user: SignedInUser | None) -> None:
        self.user = user
        for listener in list(self._listeners):
            result = listener(user)
            if inspect.isawaitable(result):
                await result


__all__ = [
    "AuthStore",
    "CredentialStorage",
    "FileCredentialStorage",
    "LOGIN_ERROR",
    "MemoryCredentialStorage",
    "REGISTER_ERROR",
]
