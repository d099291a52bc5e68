"""Service-layer errors and their RFC 7807 ``application/problem+json`` rendering.

Services raise the subclasses below; the handlers registered by
:func:`register_exception_handlers` turn them into::

    {"type": ".../errors/not-found", "title": "Employee Not Found",
     "status": 404, "detail": "...", "instance": "/api/v1/employees/..."}

plus an ``errors`` map of field name to messages when there is one.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

BASE_ERROR_URI = "https://hr-system.example.com/errors"
PROBLEM_JSON = "application/problem+json"

FieldErrors = dict[str, list[str]]

logger = logging.getLogger(__name__)


class AppException(Exception):
    status_code: int = 500
    error_type: str = "internal-error"
    title: str = "Internal Server Error"

    def __init__(
        self,
        status_code: Optional[int] = None,
        error_type: Optional[str] = None,
        title: Optional[str] = None,
        detail: str = "",
        errors: Optional[dict[str, Any]] = None,
    ) -> None:
        if status_code is not None:
            self.status_code = status_code
        if error_type is not None:
            self.error_type = error_type
        if title is not None:
            self.title = title
        self.detail = detail
        self.errors = errors
        super().__init__(detail)


class BadRequestException(AppException):
    """The request is well formed but the record's state forbids it."""

    status_code = 400
    error_type = "bad-request"
    title = "Bad Request"

    def __init__(self, detail: str) -> None:
        super().__init__(detail=detail)


class ForbiddenException(AppException):
    status_code = 403
    error_type = "forbidden"
    title = "Forbidden"

    def __init__(self, detail: str = "You do not have permission to perform this action.") -> None:
        super().__init__(detail=detail)


class NotFoundException(AppException):
    status_code = 404
    error_type = "not-found"

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(
            title=f"{entity_type} Not Found",
            detail=f"{entity_type} with id '{entity_id}' does not exist.",
        )


class ConflictError(AppException):
    """Duplicate value, or a delete blocked by rows that still reference the target."""

    status_code = 409
    error_type = "conflict"
    title = "Conflict"

    def __init__(self, detail: str, errors: Optional[FieldErrors] = None) -> None:
        super().__init__(detail=detail, errors=errors)

    @classmethod
    def duplicate(cls, field: str, value: Any) -> "ConflictError":
        return cls(
            f"An entry with {field}='{value}' already exists.",
            errors={field: [f"'{value}' is already in use."]},
        )


class ValidationException(AppException):
    """Cross-field rule broken after the schema itself validated, e.g. an inverted date range."""

    status_code = 422
    error_type = "validation-error"
    title = "Validation Error"

    def __init__(self, errors: FieldErrors) -> None:
        super().__init__(detail="One or more fields failed validation.", errors=errors)


def _problem(
    request: Request,
    *,
    status: int,
    error_type: str,
    title: str,
    detail: str,
    errors: Optional[dict[str, Any]] = None,
) -> JSONResponse:
    body: dict[str, Any] = {
        "type": f"{BASE_ERROR_URI}/{error_type}",
        "title": title,
        "status": status,
        "detail": detail,
        "instance": request.url.path,
    }
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=status, content=body, media_type=PROBLEM_JSON)


def _field_name(loc: tuple) -> str:
    # Drop the leading "body" / "query" / "path" segment
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts) or "unknown"


async def _handle_app_exception(request: Request, exc: AppException) -> JSONResponse:
    logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.detail)
    return _problem(
        request,
        status=exc.status_code,
        error_type=exc.error_type,
        title=exc.title,
        detail=exc.detail,
        errors=exc.errors,
    )


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: FieldErrors = {}
    for err in exc.errors():
        errors.setdefault(_field_name(tuple(err.get("loc", ()))), []).append(
            err.get("msg", "Invalid value"),
        )
    return _problem(
        request,
        status=422,
        error_type=ValidationException.error_type,
        title=ValidationException.title,
        detail="Request validation failed.",
        errors=errors,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, _handle_app_exception)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_validation_error)  # type: ignore[arg-type]
