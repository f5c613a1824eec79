"""Request correlation ids: context binding and the middleware that sets them."""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar, Token
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

REQUEST_ID_HEADER = "X-Request-ID"
NO_REQUEST_ID = "-"

_current_request_id: ContextVar[str] = ContextVar("taskboard_request_id", default=NO_REQUEST_ID)

access_logger = logging.getLogger("taskboard.access")


def get_request_id() -> str:
    return _current_request_id.get()


def bind_request_id(request_id: str) -> Token[str]:
    return _current_request_id.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _current_request_id.reset(token)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Bind an ``X-Request-ID`` to every request and log its outcome.

    An incoming header value is reused; otherwise a uuid4 is generated. The id
    is exposed on ``request.state.request_id`` and echoed in the response.
    """

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER) -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(self.header_name) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = bind_request_id(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            access_logger.info(
                "%s %s -> %s",
                request.method,
                request.url.path,
                response.status_code,
                extra={"duration_ms": round((time.perf_counter() - started) * 1000, 2)},
            )
        finally:
            reset_request_id(token)
        response.headers.setdefault(self.header_name, request_id)
        return response


__all__ = [
    "CorrelationIdMiddleware",
    "NO_REQUEST_ID",
    "REQUEST_ID_HEADER",
    "bind_request_id",
    "get_request_id",
    "reset_request_id",
]
