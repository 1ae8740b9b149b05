"""Error Handlers — global exception handlers for the user-management API.

Invariants:
    - UserManagementError -> structured JSON with error code, message, severity
    - RequestValidationError (bad JSON, wrong types, bad path/query) -> 400 with field details
    - Exception (catch-all) -> 500, never leaks internal details
    - Every error envelope carries the current request id; catch-all 500s also echo X-Request-ID

Design Decisions:
    - Three-layer handler: domain (UserManagementError), validation (Pydantic), catch-all (Exception)
    - 4xx domain errors logged at WARNING, 5xx at ERROR: client mistakes are not incidents
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from user_management.api.middleware import REQUEST_ID_HEADER
from user_management.core.errors import UserManagementError, ErrorSeverity
from user_management.infrastructure.observability import get_request_id

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register domain/store error handler."""

    @app.exception_handler(UserManagementError)
    async def domain_error_handler(request: Request, exc: UserManagementError):
        """Handle all user-management domain and store errors."""
        exc.context.request_id = exc.context.request_id or get_request_id()
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request parsing errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details.

        Runs outside RequestIDMiddleware, so the id header is set here.
        """
        request_id = getattr(request.state, "request_id", None) or get_request_id()
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                    "context": {"request_id": request_id},
                },
            },
            headers={REQUEST_ID_HEADER: request_id} if request_id else None,
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "context": {"request_id": get_request_id()},
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
