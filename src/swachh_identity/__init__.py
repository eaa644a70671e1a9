"""SwachhBuddy Identity - citizens, employees, sessions and authorization.

This package handles all identity-related concerns:
- User aggregate with citizen and employee profiles
- Registration, login, logout and refresh-token rotation
- Profile updates, password changes, deactivation and suspension
- Employee hierarchy, listings and statistics
- Resolving access tokens into a request-scoped UserContext

Token and password primitives live in swachh_auth; this package only
orchestrates them with the user repository.
"""

from swachh_identity.application.context import UserContext
from swachh_identity.application.dtos import (
    AuthResult,
    CitizenRegistration,
    EmployeeRegistration,
    SanitizedUser,
    SupervisorSummary,
)
from swachh_identity.application.services import (
    CitizenService,
    EmployeeService,
    IdentityService,
    RequestAuthenticator,
    ensure_employee_type,
    ensure_role,
)
from swachh_identity.domain.exceptions import (
    AccountStateError,
    AuthorizationError,
    ConflictError,
    DependencyError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)
from swachh_identity.domain.user import (
    AccountInactiveError,
    Address,
    AssignedArea,
    Coordinates,
    DuplicateEmailError,
    DuplicateEmployeeIdError,
    Email,
    EmployeeCounts,
    EmployeeType,
    EmployeeTypeCount,
    InvalidEmailError,
    InvalidProfileDataError,
    InvalidSupervisorError,
    MissingFieldsError,
    User,
    UserNotFoundError,
    UserRepository,
    UserRole,
    UserStatus,
)

__all__ = [
    # Application
    "AuthResult",
    "CitizenRegistration",
    "CitizenService",
    "EmployeeRegistration",
    "EmployeeService",
    "IdentityService",
    "RequestAuthenticator",
    "SanitizedUser",
    "SupervisorSummary",
    "UserContext",
    "ensure_employee_type",
    "ensure_role",
    # Domain - errors
    "AccountInactiveError",
    "AccountStateError",
    "AuthorizationError",
    "ConflictError",
    "DependencyError",
    "DomainException",
    "DuplicateEmailError",
    "DuplicateEmployeeIdError",
    "EntityNotFoundError",
    "ErrorCode",
    "InvalidEmailError",
    "InvalidProfileDataError",
    "InvalidSupervisorError",
    "MissingFieldsError",
    "UserNotFoundError",
    "ValidationError",
    # Domain - user
    "Address",
    "AssignedArea",
    "Coordinates",
    "Email",
    "EmployeeCounts",
    "EmployeeType",
    "EmployeeTypeCount",
    "User",
    "UserRepository",
    "UserRole",
    "UserStatus",
]
