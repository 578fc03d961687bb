# taskflow/core/handlers.py
"""
Error translation at the HTTP boundary.

`translate` is the single place where a failure becomes a status code and a
response envelope. Known failures (`AppError` subclasses) map through their
category tag; anything else is an internal error: it is logged in full and
the client only sees a generic message.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskflow.core.errors import AppError, ErrorCategory, FieldError, InternalError, ValidationError

logger = logging.getLogger("uvicorn.error")

INTERNAL_MESSAGE = "Server Error"

# Location prefixes FastAPI puts in front of the offending field name
_LOC_SOURCES = {"body", "query", "path", "header", "cookie"}


def translate(exc: BaseException) -> tuple[int, dict]:
    """
    Map a failure to (status_code, envelope).

    Returns:
        tuple: HTTP status and a body of the form
            {"success": False, "message": str, "errors": [{field, message}]?}
    """
    if isinstance(exc, AppError) and not isinstance(exc, InternalError):
        category = exc.category
        body: dict = {"success": False, "message": exc.message}
        if isinstance(exc, ValidationError):
            body["errors"] = [e.to_dict() for e in exc.errors]
        return category.status_code, body

    logger.error("[error] unhandled %s", type(exc).__name__, exc_info=exc)
    return ErrorCategory.INTERNAL.status_code, {"success": False, "message": INTERNAL_MESSAGE}


def from_request_validation(exc: RequestValidationError) -> ValidationError:
    """Convert FastAPI's request parsing errors into field-tagged ValidationError."""
    field_errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        # Integer parts are list indexes or, for undecodable JSON, a character offset
        names = [part for part in loc if part not in _LOC_SOURCES and not part.isdigit()]
        field = names[-1] if names else (loc[0] if loc else "request")
        field_errors.append(FieldError(field, err.get("msg", "Invalid value")))
    return ValidationError(field_errors)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status_code, body = translate(exc)
    return JSONResponse(status_code=status_code, content=body)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    status_code, body = translate(from_request_validation(exc))
    return JSONResponse(status_code=status_code, content=body)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Routing-level failures (unknown path, wrong method) keep their status
    if exc.status_code == 404:
        message = f"Not Found - {request.url.path}"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code, body = translate(exc)
    return JSONResponse(status_code=status_code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the boundary handlers on an application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
