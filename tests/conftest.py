from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from uuid import uuid4

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from taskboard.core.config import get_settings
from taskboard.db import close_document_store, init_document_store
from taskboard.main import create_app

SignupFactory = Callable[..., Awaitable[tuple[dict, dict[str, str]]]]


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("TASKBOARD_ENVIRONMENT", "test")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def document_store() -> AsyncIterator[None]:
    await init_document_store(
        client=AsyncMongoMockClient(),
        database_name=f"taskboard_test_{uuid4().hex}",
        force=True,
    )
    try:
        yield
    finally:
        await close_document_store()


@pytest_asyncio.fixture
async def app(document_store: None) -> FastAPI:
    return create_app()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


@pytest.fixture()
def signup(client: AsyncClient) -> SignupFactory:
    async def _signup(
        name: str = "Task Owner",
        email: str = "owner@example.com",
        password: str = "secret123",
    ) -> tuple[dict, dict[str, str]]:
        response = await client.post(
            "/api/users/signup",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], {"Authorization": f"Bearer {body['tokens']['access_token']}"}

    return _signup
