"""
API error taxonomy and the exception handlers that render it.

Services raise `ApiError` subclasses; the handlers registered in `api/main.py`
turn them into the JSON envelope expected by the endpoint group (see
`core.envelope`). Anything that is not an `ApiError` becomes a 500 with a
generic message; the stack trace only goes to the server log.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import envelope

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, *, body: dict | None = None) -> None:
        self.message = message or self.default_message
        # Replaces the rendered envelope entirely (e.g. journal `{"errors": [...]}`).
        self.body = body
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    default_message = "Bad request"


class AuthenticationError(ApiError):
    status_code = 401
    default_message = "No authorization token provided"


class AuthorizationError(ApiError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Conflict"


class InternalError(ApiError):
    status_code = 500
    default_message = "Internal server error"


def _validation_message(exc: RequestValidationError) -> str:
    fields: list[str] = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        if loc:
            fields.append(".".join(loc))
    if not fields:
        return "Invalid request"
    return "Invalid request parameters: " + ", ".join(dict.fromkeys(fields))


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("api_error path=%s message=%s", request.url.path, exc.message)
    if exc.body is not None:
        return JSONResponse(status_code=exc.status_code, content=exc.body)
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope.error_body(request, exc.status_code, exc.message),
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=envelope.error_body(request, 400, _validation_message(exc)),
    )


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={"status": "error", "error": {"message": "not found", "code": 404}},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope.error_body(request, exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=envelope.error_body(request, 500, InternalError.default_message),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
