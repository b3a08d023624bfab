"""Error Handlers — global exception handlers for the blog API.

Invariants:
    - BlogError → structured JSON with its own http_status (404, 409, 503, 500)
    - RequestValidationError (bad JSON, missing fields, bad or out-of-range ids) → 400
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (BlogError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the app module small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from blog_api.core.errors import BlogError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_blog_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_blog_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(BlogError)
    async def blog_error_handler(request: Request, exc: BlogError):
        """Handle all blog domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"BlogError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register request validation handler (body, path and query)."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        content = _build_validation_error_response(exc)
        logger.warning(
            f"Rejected {request.method} {request.url.path}: "
            f"{content['error']['message']}",
            extra={
                "error_code": "VALIDATION_ERROR",
                "path": request.url.path,
                "method": request.method,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=content,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — the client sees a fixed message, the log keeps the traceback."""
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
            exc_info=exc,
            extra={
                "error_code": "INTERNAL_ERROR",
                "path": request.url.path,
                "method": request.method,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build the 400 envelope; an unparseable body gets its own message."""
    errors = exc.errors()
    malformed = any(e["type"] == "json_invalid" for e in errors)
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Malformed JSON body" if malformed else "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in errors
            ],
        },
    }
