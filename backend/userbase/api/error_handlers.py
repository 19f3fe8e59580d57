"""Error Handlers - global exception handlers for transport-level failures.

Invariants:
    - RequestValidationError -> 400 standard body naming the offending fields
    - Starlette HTTPException (unknown route, wrong method) -> standard body, same status
    - Exception (catch-all) -> 500 standard body; never leaks internal details
    - Application and storage errors are mapped by handlers, not here

Design Decisions:
    - Three-layer handler: validation (pydantic), HTTP (routing), catch-all (Exception)
    - Extracted from main.py to keep the app factory short
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from userbase.api.responses import error_response

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Reject malformed requests before any handler runs."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "method": request.method},
        )
        return error_response(
            status.HTTP_400_BAD_REQUEST, build_validation_message(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing-level HTTP error handler (404 unknown route, 405, ...)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return error_response(
            exc.status_code, message, headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred",
        )


def build_validation_message(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into 'loc: msg' pairs."""
    parts = [
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    ]
    return "; ".join(parts) or "Invalid request data"
