"""Asynchronous HTTP client for the task manager API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any

import httpx
from pydantic_core import to_jsonable_python

from .config import ClientSettings, get_client_settings
from .models import SignedInUser, TaskRecord, UserProfile

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Raised when a request fails.

    ``message`` holds the ``message`` field of the server's error envelope and
    is ``None`` when the server never answered or sent no message.
    """

    def __init__(self, message: str | None, *, status_code: int | None = None) -> None:
        super().__init__(message or "Request failed")
        self.message = message
        self.status_code = status_code


def _extract_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class TaskboardAPI:
    """Thin wrapper around :class:`httpx.AsyncClient` speaking the REST surface.

    Authenticated calls take the bearer ``token`` explicitly, so a single
    instance can be shared between the auth and task stores.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_client_settings()
        self._client = httpx.AsyncClient(
            base_url=self._settings.api_url,
            timeout=self._settings.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "TaskboardAPI":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            response = await self._client.request(
                method,
                path,
                headers=headers,
                json=to_jsonable_python(payload) if payload is not None else None,
            )
        except httpx.HTTPError as exc:
            logger.warning("Request to %s %s failed", method, path, exc_info=exc)
            raise APIError(None) from exc

        if response.is_error:
            raise APIError(_extract_message(response), status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise APIError(None, status_code=response.status_code) from exc

    @staticmethod
    def _signed_in_user(body: Mapping[str, Any]) -> SignedInUser:
        user = body["user"]
        return SignedInUser(
            id=user["id"],
            name=user["name"],
            email=user["email"],
            token=body["tokens"]["access_token"],
        )

    async def signup(self, *, name: str, email: str, password: str) -> SignedInUser:
        body = await self._request(
            "POST",
            "/api/users/signup",
            payload={"name": name, "email": email, "password": password},
        )
        return self._signed_in_user(body)

    async def signin(self, *, email: str, password: str) -> SignedInUser:
        body = await self._request(
            "POST",
            "/api/users/signin",
            payload={"email": email, "password": password},
        )
        return self._signed_in_user(body)

    async def profile(self, *, token: str) -> UserProfile:
        body = await self._request("GET", "/api/users/profile", token=token)
        return UserProfile.model_validate(body)

    async def list_tasks(self, *, token: str) -> list[TaskRecord]:
        body = await self._request("GET", "/api/tasks", token=token)
        return [TaskRecord.model_validate(item) for item in body]

    async def get_task(self, task_id: str, *, token: str) -> TaskRecord:
        body = await self._request("GET", f"/api/tasks/{task_id}", token=token)
        return TaskRecord.model_validate(body)

    async def create_task(self, data: Mapping[str, Any], *, token: str) -> TaskRecord:
        body = await self._request("POST", "/api/tasks", token=token, payload=data)
        return TaskRecord.model_validate(body)

    async def update_task(
        self,
        task_id: str,
        data: Mapping[str, Any],
        *,
        token: str,
    ) -> TaskRecord:
        body = await self._request("PUT", f"/api/tasks/{task_id}", token=token, payload=data)
        return TaskRecord.model_validate(body)

    async def delete_task(self, task_id: str, *, token: str) -> str:
        body = await self._request("DELETE", f"/api/tasks/{task_id}", token=token)
        return str(body.get("message", ""))


__all__ = ["APIError", "TaskboardAPI"]
