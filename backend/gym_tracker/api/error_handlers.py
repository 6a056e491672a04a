"""Error Handlers — global exception handlers producing the uniform error envelope.

Invariants:
    - GymTrackerError → its http_status with code, message, category, severity
    - RequestValidationError → 400 VALIDATION_ERROR with "field: message" summary
      and per-field details
    - Starlette HTTPException (unknown route, wrong method) → same envelope, its status
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Four-layer handler registered from main.py via register_error_handlers
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gym_tracker.core.clock import utcnow
from gym_tracker.core.errors import (
    ErrorCategory, ErrorSeverity, GymTrackerError, InternalError,
)

logger = logging.getLogger(__name__)

_HTTP_STATUS_CODES = {
    401: ("UNAUTHORIZED", ErrorCategory.UNAUTHORIZED),
    403: ("FORBIDDEN", ErrorCategory.FORBIDDEN),
    404: ("RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND),
    409: ("CONFLICT", ErrorCategory.CONFLICT),
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(GymTrackerError)
    async def domain_error_handler(request: Request, exc: GymTrackerError):
        """Handle all domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Routing-level errors raised by Starlette itself."""
        code, category = _HTTP_STATUS_CODES.get(
            exc.status_code, ("HTTP_ERROR", ErrorCategory.VALIDATION),
        )
        return JSONResponse(
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
            content={
                "success": False,
                "error": {
                    "code": code,
                    "message": str(exc.detail),
                    "category": category.value,
                    "severity": ErrorSeverity.WARNING.value,
                    "timestamp": utcnow().isoformat(),
                },
            },
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=InternalError().to_response(),
        )


def _field_name(loc: tuple) -> str:
    """("body", "sets", 0, "reps") → "sets.0.reps"."""
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(parts)


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    details = [
        {
            "field": _field_name(e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    summary = ", ".join(f"{d['field']}: {d['message']}" for d in details)
    return {
        "success": False,
        "error": {
            "code": "VALIDATION_ERROR",
            "message": summary or "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "timestamp": utcnow().isoformat(),
            "details": details,
        },
    }
