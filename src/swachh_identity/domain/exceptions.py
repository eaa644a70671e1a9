"""Error taxonomy of the identity domain.

Every error the services raise on purpose is a DomainException carrying an
ErrorCode; the API maps codes to HTTP statuses in a single table.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable codes returned to API clients as ``code``.

    Clients branch on these values; renaming one is a breaking change.
    """

    # Validation Errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_EMAIL = "INVALID_EMAIL"
    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_SUPERVISOR = "INVALID_SUPERVISOR"
    WEAK_PASSWORD = "WEAK_PASSWORD"

    # Authentication Errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"

    # Authorization Errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not Found Errors (404)
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Conflict Errors (409)
    CONFLICT = "CONFLICT"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    DUPLICATE_EMPLOYEE_ID = "DUPLICATE_EMPLOYEE_ID"

    # Infrastructure Errors (500)
    DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"

    # General Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Root of the identity error hierarchy.

    Attributes
    ----------
    message
        Text shown to the client; never contains secrets
    code
        One of :class:`ErrorCode`
    details
        Extra context for the logs only
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        name = type(self).__name__
        return f"{name}({self.code.value}: {self.message!r}, details={self.details!r})"


class ValidationError(DomainException):
    """Client input is malformed or incomplete (400)."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EntityNotFoundError(DomainException):
    """The addressed record does not exist or is not visible (404)."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ConflictError(DomainException):
    """A uniqueness rule would be broken (409)."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFLICT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class AccountStateError(DomainException):
    """Raised when the account status forbids the operation."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ACCOUNT_INACTIVE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class AuthorizationError(DomainException):
    """Raised when an authenticated caller is not entitled to an operation."""

    def __init__(
        self,
        message: str = "Insufficient permissions",
        code: ErrorCode = ErrorCode.FORBIDDEN,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class DependencyError(DomainException):
    """Raised when the store or the password hasher is unavailable.

    The message is safe for clients; the underlying cause goes into
    ``details`` and the logs. Callers may retry.
    """

    retryable = True

    def __init__(
        self,
        message: str = "Service temporarily unavailable, please try again",
        code: ErrorCode = ErrorCode.DEPENDENCY_FAILURE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
