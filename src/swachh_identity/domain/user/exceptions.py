"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""

from collections.abc import Iterable

from swachh_identity.domain.exceptions import (
    AccountStateError,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_EMAIL)


class InvalidProfileDataError(ValidationError):
    """Raised when a profile field (name, phone, address, ...) is malformed."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message, ErrorCode.INVALID_FORMAT, {"field": field})


class MissingFieldsError(ValidationError):
    """Required registration fields are absent."""

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = list(fields)
        super().__init__(
            f"Missing required fields: {', '.join(self.fields)}",
            ErrorCode.MISSING_FIELDS,
            {"fields": self.fields},
        )


class InvalidSupervisorError(ValidationError):
    """Supervisor reference does not resolve to a supervisor or admin."""

    def __init__(self, supervisor_id: object = None) -> None:
        self.supervisor_id = supervisor_id
        super().__init__(
            "Invalid supervisor ID",
            ErrorCode.INVALID_SUPERVISOR,
            {"supervisor_id": str(supervisor_id)},
        )


class DuplicateEmailError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Email is already registered",
            ErrorCode.DUPLICATE_EMAIL,
            {"email": email},
        )


class DuplicateEmployeeIdError(ConflictError):
    """Employee identifier already taken."""

    def __init__(self, employee_id: str) -> None:
        self.employee_id = employee_id
        super().__init__(
            "Employee ID is already taken",
            ErrorCode.DUPLICATE_EMPLOYEE_ID,
            {"employee_id": employee_id},
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found (or not visible to the requested role)."""

    def __init__(self, user_id: object, label: str = "User") -> None:
        self.user_id = user_id
        super().__init__(
            f"{label} not found",
            ErrorCode.USER_NOT_FOUND,
            {"user_id": str(user_id)},
        )


class AccountInactiveError(AccountStateError):
    """Account is inactive or suspended."""

    def __init__(self, user_id: object = None) -> None:
        self.user_id = user_id
        super().__init__(
            "Account is inactive or suspended",
            details={"user_id": str(user_id)},
        )
