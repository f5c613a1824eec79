"""ASGI application factory and the ``taskboard-api`` entry point."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routers import api_router, system_router
from .core.config import Settings, get_settings
from .core.correlation import CorrelationIdMiddleware
from .core.logging import configure_logging
from .db import close_document_store, init_document_store
from .errors import register_exception_handlers


def normalise_prefix(raw: str) -> str:
    """Turn ``api``, ``/api/`` and ``/api`` into ``/api``; blank means no prefix."""
    prefix = raw.strip().strip("/")
    return f"/{prefix}" if prefix else ""


def _install_middleware(application: FastAPI, settings: Settings) -> None:
    # Starlette runs the last added middleware first, so CORS wraps the
    # correlation middleware and preflight responses skip the access log.
    application.add_middleware(CorrelationIdMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    await init_document_store()
    try:
        yield
    finally:
        await close_document_store()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)
    prefix = normalise_prefix(settings.api_prefix)

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        summary="Personal task manager with per-user task ownership.",
        openapi_url=f"{prefix}/openapi.json",
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.api_prefix = prefix

    _install_middleware(application, settings)
    application.include_router(api_router, prefix=prefix)
    application.include_router(system_router)
    register_exception_handlers(application)
    return application


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "taskboard.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.reload,
        log_config=None,
    )
