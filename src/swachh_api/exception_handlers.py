"""Centralized exception handlers for the FastAPI application.

Domain and auth exceptions are mapped to HTTP responses in one place so
routers can simply let them propagate.

Error Response Format:
    {
        "success": false,
        "message": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE",
        "errors": ["optional", "list"]
    }

Usage:
    from swachh_api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from swachh_auth import (
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    WeakPasswordError,
)
from swachh_identity import (
    AccountStateError,
    AuthorizationError,
    ConflictError,
    DependencyError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    MissingFieldsError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation errors
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_FORMAT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MISSING_FIELDS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SUPERVISOR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
    # 401 Unauthorized
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.ACCOUNT_INACTIVE: status.HTTP_401_UNAUTHORIZED,
    # 403 Forbidden
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict - already exists
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_EMAIL: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_EMPLOYEE_ID: status.HTTP_409_CONFLICT,
    # 500 Internal Server Error
    ErrorCode.DEPENDENCY_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Codes for errors raised as plain HTTPException (auth dependencies, 404s)
HTTP_STATUS_TO_CODE: dict[int, ErrorCode] = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.VALIDATION_ERROR,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorCode.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorCode.ENTITY_NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorCode.CONFLICT,
}


def _get_status_for_exception(exc: DomainException) -> int:  # NOQA: PLR0911
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, AccountStateError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, AuthorizationError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, DependencyError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR

    return status.HTTP_400_BAD_REQUEST


def _get_code_for_auth_error(exc: AuthError) -> ErrorCode:
    if isinstance(exc, WeakPasswordError):
        return ErrorCode.WEAK_PASSWORD
    if isinstance(exc, InvalidCredentialsError):
        return ErrorCode.INVALID_CREDENTIALS
    if isinstance(exc, InvalidTokenError):
        return ErrorCode.INVALID_TOKEN
    return ErrorCode.UNAUTHORIZED


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    errors: Optional[list[str]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content: dict[str, object] = {
        "success": False,
        "message": message,
        "code": code,
    }
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _field_name(loc: tuple) -> str:
    # ("body", "address", "city") -> "address.city"
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) or str(loc[-1])


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response.

        Store and hasher failures are logged at error level; the client
        only sees the safe message.
        """
        status_code = _get_status_for_exception(exc)

        if isinstance(exc, DependencyError):
            logger.error(
                "Dependency failure on %s %s: %s",
                request.method,
                request.url.path,
                exc.details,
            )
        else:
            logger.warning(
                "Domain exception on %s %s: %s (code=%s, details=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
                exc.details,
            )

        errors = exc.fields if isinstance(exc, MissingFieldsError) else None
        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
            errors=errors,
        )

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Handle swachh_auth errors.

        Weak passwords are a client input problem (400, with every unmet
        rule); everything else is an authentication failure (401).
        """
        code = _get_code_for_auth_error(exc)

        if isinstance(exc, WeakPasswordError):
            return _create_error_response(
                status_code=status.HTTP_400_BAD_REQUEST,
                message=exc.message,
                code=code.value,
                errors=exc.violations,
            )

        logger.info(
            "Authentication failed on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
        )
        headers = None
        if isinstance(exc, (InvalidTokenError, MissingTokenError)):
            headers = {"WWW-Authenticate": "Bearer"}
        return _create_error_response(
            status_code=status.HTTP_401_UNAUTHORIZED,
            message=exc.message,
            code=code.value,
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Wrap HTTPException (auth dependencies, unknown routes) in the envelope."""
        code = HTTP_STATUS_TO_CODE.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
        return _create_error_response(
            status_code=exc.status_code,
            message=str(exc.detail),
            code=code.value,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report malformed request data as 400.

        Missing fields are listed by their wire name; any other problem
        yields one ``field: reason`` entry per error.
        """
        missing = [
            _field_name(tuple(error["loc"]))
            for error in exc.errors()
            if error.get("type") == "missing"
        ]
        if missing:
            return _create_error_response(
                status_code=status.HTTP_400_BAD_REQUEST,
                message=f"Missing required fields: {', '.join(missing)}",
                code=ErrorCode.MISSING_FIELDS.value,
                errors=missing,
            )

        errors = [
            f"{_field_name(tuple(error['loc']))}: {error['msg']}"
            for error in exc.errors()
        ]
        logger.debug(
            "Invalid request data on %s %s: %s",
            request.method,
            request.url.path,
            errors,
        )
        return _create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Invalid request data",
            code=ErrorCode.VALIDATION_ERROR.value,
            errors=errors,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all for unexpected exceptions.

        The full traceback is logged; the client gets a generic message.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
