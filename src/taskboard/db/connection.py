"""Lifecycle of the MongoDB connection backing the beanie documents."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from ..core.config import get_settings
from ..models import DOCUMENT_MODELS

logger = logging.getLogger(__name__)


@dataclass
class _StoreState:
    client: AsyncIOMotorClient | None = None
    database_name: str | None = None

    @property
    def ready(self) -> bool:
        return self.database_name is not None


_state = _StoreState()
_startup_lock = asyncio.Lock()


async def init_document_store(
    *,
    client: AsyncIOMotorClient | None = None,
    database_name: str | None = None,
    force: bool = False,
) -> None:
    """Bind the document models to a database.

    A supplied ``client`` replaces the current one. ``database_name``
    overrides ``mongo_database`` so tests can isolate their data per case.
    Repeated calls are no-ops unless ``force`` is set.
    """
    async with _startup_lock:
        if client is not None:
            _state.client, _state.database_name = client, None
        if _state.ready and not force:
            return

        settings = get_settings()
        if _state.client is None:
            _state.client = AsyncIOMotorClient(settings.mongo_url, tz_aware=True)
        name = database_name or settings.mongo_database

        await init_beanie(database=_state.client[name], document_models=list(DOCUMENT_MODELS))
        _state.database_name = name
        logger.info("Document store initialised", extra={"database": name})


async def close_document_store() -> None:
    client, _state.client, _state.database_name = _state.client, None, None
    if client is not None:
        client.close()


__all__ = ["close_document_store", "init_document_store"]
