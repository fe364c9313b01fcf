from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .models import ErrorResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Application error carrying the public error envelope fields."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.hint = hint


def not_found(resource: str, identifier: Optional[str] = None, hint: Optional[str] = None) -> AppError:
    suffix = f" with id '{identifier}'" if identifier else ""
    return AppError(
        "NOT_FOUND",
        f"{resource}{suffix} not found",
        status.HTTP_404_NOT_FOUND,
        hint or f"Check that the {resource.lower()} exists",
    )


def validation(field: str, reason: str, code: str = "VALIDATION_ERROR") -> AppError:
    return AppError(
        code,
        f"Validation failed for field '{field}': {reason}",
        status.HTTP_400_BAD_REQUEST,
        "Check your input data and try again",
    )


def fixture_unavailable(message: str) -> AppError:
    return AppError(
        "FIXTURE_UNAVAILABLE",
        message,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Please try again later or contact support",
    )


def not_implemented(feature: str) -> AppError:
    return AppError(
        "NOT_IMPLEMENTED",
        f"Non-mock {feature} not implemented",
        status.HTTP_501_NOT_IMPLEMENTED,
        "Enable mock mode with USE_MOCKS=1",
    )


# documented error bodies for router OpenAPI schemas
ERROR_RESPONSES: Dict[Union[int, str], Dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    status.HTTP_501_NOT_IMPLEMENTED: {"model": ErrorResponse},
}


# (field, pydantic error type) -> public error code
_FIELD_ERROR_CODES: Dict[tuple, str] = {
    ("body", "missing"): "MISSING_PROMPT",
    ("prompt", "missing"): "MISSING_PROMPT",
    ("prompt", "string_too_short"): "MISSING_PROMPT",
    ("prompt", "string_too_long"): "PROMPT_TOO_LONG",
    ("timeRange", "missing"): "MISSING_TIME_RANGE",
    ("timeRange", "literal_error"): "INVALID_TIME_RANGE",
    ("period", "literal_error"): "INVALID_PERIOD",
    ("status", "literal_error"): "INVALID_STATUS",
    ("category", "literal_error"): "INVALID_CATEGORY",
    ("type", "literal_error"): "INVALID_EXPORT_TYPE",
    ("format", "literal_error"): "INVALID_FORMAT",
}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or "unknown"


def error_body(code: str, message: str, hint: Optional[str], request_id: str) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if hint:
        error["hint"] = hint
    return {"error": error, "requestId": request_id}


async def app_error_handler(request: Request, exc: AppError) -> ORJSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log("%s %s failed with %s: %s", request.method, request.url.path, exc.code, exc.message)
    return ORJSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.code, exc.message, exc.hint, _request_id(request)),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> ORJSONResponse:
    errors = exc.errors()
    if not errors:
        body = error_body("VALIDATION_ERROR", "Validation failed", None, _request_id(request))
        return ORJSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)

    first = errors[0]
    loc = [str(part) for part in first.get("loc", ())]
    error_type = first.get("type", "")
    if error_type == "json_invalid":
        body = error_body(
            "INVALID_JSON",
            "Invalid JSON in request body",
            "Check your request payload format",
            _request_id(request),
        )
        return ORJSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)

    field = loc[-1] if loc else ""
    code = _FIELD_ERROR_CODES.get((field, error_type), "VALIDATION_ERROR")
    hint = f"Invalid field: {'.'.join(loc)}" if loc else None
    logger.info("Request validation failed on %s: %s", ".".join(loc) or "<root>", first.get("msg"))
    body = error_body(code, str(first.get("msg") or "Validation failed"), hint, _request_id(request))
    return ORJSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> ORJSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        missing = not_found(
            f"Route {request.method} {request.url.path}",
            hint="Check the API documentation for available endpoints",
        )
        code, message, hint = missing.code, missing.message, missing.hint
        logger.warning("Route not found: %s %s", request.method, request.url.path)
    else:
        code = "HTTP_ERROR"
        message = str(exc.detail)
        hint = None
    return ORJSONResponse(
        status_code=exc.status_code,
        content=error_body(code, message, hint, _request_id(request)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> ORJSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return ORJSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            "INTERNAL_ERROR",
            "An unexpected error occurred",
            "Please try again later or contact support",
            _request_id(request),
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
