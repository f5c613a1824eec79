"""Domain errors and the handlers that render every failure as one envelope.

All error responses share the shape ``{"code", "message", "details"}``; the
request correlation id is merged into ``details``.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from http import HTTPStatus
from typing import Any, Mapping, TypeVar

from fastapi import FastAPI, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from .core.correlation import REQUEST_ID_HEADER, bind_request_id, reset_request_id
from .schemas.system import ErrorResponse

logger = logging.getLogger(__name__)

ExcT = TypeVar("ExcT", bound=Exception)
Handler = Callable[[Request, ExcT], Awaitable[JSONResponse]]


class ApplicationError(Exception):
    """Base class for failures the API reports with a specific code."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "application_error",
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Any | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        self.headers = dict(headers) if headers else None


class NotFoundError(ApplicationError):
    def __init__(self, message: str = "Resource not found.", *, details: Any | None = None) -> None:
        super().__init__(message, code="not_found", status_code=status.HTTP_404_NOT_FOUND, details=details)


class NotAuthorizedError(ApplicationError):
    """The caller is unauthenticated or may not touch the resource.

    ``challenge`` adds ``WWW-Authenticate: Bearer`` for credential failures.
    """

    def __init__(
        self,
        message: str = "Not authorized",
        *,
        details: Any | None = None,
        challenge: bool = False,
    ) -> None:
        super().__init__(
            message,
            code="not_authorized",
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            headers={"WWW-Authenticate": "Bearer"} if challenge else None,
        )


_CODES_BY_STATUS: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_401_UNAUTHORIZED: "not_authorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
}


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _with_request_details(request_id: str | None, details: Any | None) -> Any | None:
    if not request_id:
        return details
    if details is None:
        return {"request_id": request_id}
    if isinstance(details, dict):
        return {"request_id": request_id, **details}
    return {"request_id": request_id, "detail": details}


def _status_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def error_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    """Build the JSON error envelope for ``request``."""

    request_id = _request_id(request)
    body = ErrorResponse(code=code, message=message, details=_with_request_details(request_id, details))
    response = JSONResponse(status_code=status_code, content=body.model_dump(mode="json"), headers=headers)
    if request_id:
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


def _log_for(status_code: int) -> Callable[..., None]:
    return logger.error if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning


def _in_request_context(handler: Handler[ExcT]) -> Handler[ExcT]:
    # Handlers reached through ServerErrorMiddleware run after the correlation
    # middleware has reset the context, so the id is re-bound from request.state.
    @functools.wraps(handler)
    async def wrapper(request: Request, exc: ExcT) -> JSONResponse:
        request_id = _request_id(request)
        token = bind_request_id(request_id) if request_id else None
        try:
            return await handler(request, exc)
        finally:
            if token is not None:
                reset_request_id(token)

    return wrapper


@_in_request_context
async def handle_application_error(request: Request, exc: ApplicationError) -> JSONResponse:
    _log_for(exc.status_code)(
        "Application error encountered",
        extra={"code": exc.code, "status_code": exc.status_code, "path": request.url.path},
    )
    return error_response(
        request,
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
        headers=exc.headers,
    )


@_in_request_context
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    logger.warning("Request validation failed", extra={"errors": errors, "path": request.url.path})
    return error_response(
        request,
        status_code=422,
        code="validation_error",
        message="Request validation failed.",
        details={"errors": errors},
    )


@_in_request_context
async def handle_duplicate_key_error(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    logger.error("Duplicate key rejected by the document store", exc_info=exc)
    return error_response(
        request,
        status_code=status.HTTP_409_CONFLICT,
        code="db_integrity_error",
        message="Database integrity violation.",
    )


@_in_request_context
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _CODES_BY_STATUS.get(exc.status_code, "http_error")
    if isinstance(exc.detail, str):
        message, details = exc.detail, None
    else:
        message = _status_phrase(exc.status_code)
        details = {"errors": exc.detail} if isinstance(exc.detail, list) else exc.detail
    _log_for(exc.status_code)(
        "HTTP exception raised",
        extra={"code": code, "status_code": exc.status_code, "path": request.url.path},
    )
    return error_response(
        request,
        status_code=exc.status_code,
        code=code,
        message=message,
        details=details,
        headers=exc.headers or None,
    )


@_in_request_context
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled application error", extra={"path": request.url.path})
    return error_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code="server_error",
        message=str(exc) or "Internal server error.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on ``app``."""

    app.add_exception_handler(ApplicationError, handle_application_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(DuplicateKeyError, handle_duplicate_key_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)


__all__ = [
    "ApplicationError",
    "NotAuthorizedError",
    "NotFoundError",
    "error_response",
    "register_exception_handlers",
]
