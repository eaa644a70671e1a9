"""User domain: citizens and municipal employees.

This domain handles:
- User aggregate (identity, credentials, profile)
- Value objects (email, role, status, employee type, locations)
- Repository interface for persistence
"""

from swachh_identity.domain.user.aggregates import User
from swachh_identity.domain.user.exceptions import (
    AccountInactiveError,
    DuplicateEmailError,
    DuplicateEmployeeIdError,
    InvalidEmailError,
    InvalidProfileDataError,
    InvalidSupervisorError,
    MissingFieldsError,
    UserNotFoundError,
)
from swachh_identity.domain.user.repositories import (
    EmployeeCounts,
    EmployeeTypeCount,
    UserRepository,
)
from swachh_identity.domain.user.value_objects import (
    Address,
    AssignedArea,
    Coordinates,
    Email,
    EmployeeType,
    UserRole,
    UserStatus,
)

__all__ = [
    "AccountInactiveError",
    "Address",
    "AssignedArea",
    "Coordinates",
    "DuplicateEmailError",
    "DuplicateEmployeeIdError",
    "Email",
    "EmployeeCounts",
    "EmployeeType",
    "EmployeeTypeCount",
    "InvalidEmailError",
    "InvalidProfileDataError",
    "InvalidSupervisorError",
    "MissingFieldsError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
    "UserStatus",
]
