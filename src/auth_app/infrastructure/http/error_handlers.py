"""Exception handlers shaping every error into `{statusCode, message, errors?}`."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth_app.application.dto.auth_models import ErrorResponse, FieldErrorResponse

logger = logging.getLogger(__name__)

VALIDATION_FAILED_MESSAGE = "Validation failed"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def register_error_handlers(app: FastAPI) -> None:
    """Install HTTP, request-validation, and catch-all error handlers on the app."""

    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


async def _handle_http_exception(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, StarletteHTTPException)
    body = ErrorResponse(status_code=exc.status_code, message=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
        headers=exc.headers,
    )


async def _handle_validation_error(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RequestValidationError)
    field_errors = [_to_field_error(error) for error in exc.errors()]
    message = field_errors[0].message if field_errors else VALIDATION_FAILED_MESSAGE
    body = ErrorResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        message=message,
        errors=field_errors,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "auth_api_unhandled_error method=%s path=%s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    body = ErrorResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message=INTERNAL_ERROR_MESSAGE,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def _to_field_error(error: Mapping[str, Any]) -> FieldErrorResponse:
    field = _field_name(error.get("loc", ()))
    label = field.capitalize()
    error_type = error.get("type")

    if error_type == "missing":
        message = f"{label} is required"
    elif error_type == "string_type":
        message = f"{label} must be a string"
    elif error_type == "string_unicode":
        message = f"{label} must be valid UTF-8 text"
    elif error_type == "extra_forbidden":
        message = f"property {field} should not exist"
    elif error_type == "json_invalid":
        message = VALIDATION_FAILED_MESSAGE
    else:
        message = str(error.get("msg") or VALIDATION_FAILED_MESSAGE)

    return FieldErrorResponse(field=field, message=message)


def _field_name(loc: Sequence[object]) -> str:
    names = [str(part) for part in loc if isinstance(part, str) and part != "body"]
    return names[-1] if names else "body"
