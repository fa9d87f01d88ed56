"""Error Handlers — global exception handlers for the Task API.

Invariants:
    - TaskApiError → its own to_response() envelope and http_status
    - RequestValidationError → same {"errors": [...]} shape as field rule failures
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (TaskApiError), validation (FastAPI), catch-all (Exception)
    - Extracted from main.py so create_app stays a short wiring function
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from task_api.core.errors import TaskApiError, ErrorSeverity, InternalServerError
from task_api.infrastructure.observability import request_extra

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_task_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_task_api_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(TaskApiError)
    async def task_api_error_handler(request: Request, exc: TaskApiError):
        """Handle all Task API domain/infrastructure errors."""
        level = (
            logging.WARNING
            if exc.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)
            else logging.ERROR
        )
        logger.log(
            level,
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_code": exc.code, **request_extra(request)},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register FastAPI request validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle framework-level validation errors."""
        logger.warning(
            f"Validation error: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", **request_extra(request)},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(_build_validation_error_response(exc)),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        error = InternalServerError()
        logger.error(
            f"Unhandled exception: {exc}",
            exc_info=exc,
            extra={"error_code": error.code, **request_extra(request)},
        )
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Map FastAPI error entries onto the field error shape."""
    errors = []
    for e in exc.errors():
        loc = [str(part) for part in e["loc"]]
        errors.append({
            "location": loc[0] if loc else "request",
            "field": ".".join(loc[1:]) or None,
            "message": e["msg"],
            "value": e.get("input"),
        })
    return {"errors": errors}
