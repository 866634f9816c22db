"""Error Handlers — global exception handlers for the user API.

Invariants:
    - UserApiError → its own status and body ({"Error": ...} or {"FieldErrors": {...}})
    - RequestValidationError → 400 body-decoding messages (empty, badly-formed, wrong type, unknown key)
    - Starlette HTTPException → {"Error": ...} for unmatched routes and methods
    - Exception (catch-all) → 500, never leaks internal details; full detail logged

Design Decisions:
    - Business-rule failures are logged at INFO: they are client outcomes, not failures
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from userapi.core.errors import (
    NOT_FOUND_MESSAGE, SERVER_ERROR_MESSAGE, ErrorSeverity, UserApiError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_user_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_user_api_error_handler(app: FastAPI) -> None:

    @app.exception_handler(UserApiError)
    async def user_api_error_handler(request: Request, exc: UserApiError):
        """Handle all domain/infrastructure errors."""
        extra = {"error_code": exc.code, "path": request.url.path}
        if exc.context.user_id:
            extra["user_id"] = exc.context.user_id
        if exc.severity == ErrorSeverity.CRITICAL:
            logger.error(f"UserApiError: {exc.message}", extra=extra, exc_info=exc)
        else:
            logger.info(f"{exc.code}: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(),
            headers=exc.headers(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Map request decoding failures to the 400/404 error bodies."""
        logger.info(f"Bad request on {request.url.path}: {exc.errors()}")
        code, message = describe_validation_errors(exc.errors())
        return JSONResponse(status_code=code, content={"Error": message})


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = NOT_FOUND_MESSAGE
        elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = f"The {request.method} method is not supported for this resource"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"Error": message},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            extra={"path": request.url.path, "method": request.method},
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"Error": SERVER_ERROR_MESSAGE},
        )


def describe_validation_errors(errors: list[dict]) -> tuple[int, str]:
    """Pick the status and message for the first decoding error."""
    if not errors:
        return status.HTTP_400_BAD_REQUEST, "Body contains badly-formed JSON"

    err = errors[0]
    loc = tuple(err.get("loc", ()))
    kind = err.get("type", "")

    if loc and loc[0] == "path":
        return status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE
    if kind == "json_invalid":
        return status.HTTP_400_BAD_REQUEST, "Body contains badly-formed JSON"
    if kind == "missing" and loc == ("body",):
        return status.HTTP_400_BAD_REQUEST, "Body must not be empty"
    if kind == "extra_forbidden":
        return status.HTTP_400_BAD_REQUEST, f'Body contains unknown key "{loc[-1]}"'
    if len(loc) > 1 and loc[0] == "body":
        return status.HTTP_400_BAD_REQUEST, (
            f'Body contains incorrect JSON type for field "{loc[1]}"'
        )
    return status.HTTP_400_BAD_REQUEST, "Body contains incorrect JSON type"
