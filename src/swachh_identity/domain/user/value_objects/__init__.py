"""Value objects for the user domain."""

from swachh_identity.domain.user.value_objects.address import (
    Address,
    AssignedArea,
    Coordinates,
)
from swachh_identity.domain.user.value_objects.email import Email
from swachh_identity.domain.user.value_objects.employee_type import EmployeeType
from swachh_identity.domain.user.value_objects.user_role import UserRole
from swachh_identity.domain.user.value_objects.user_status import UserStatus

__all__ = [
    "Address",
    "AssignedArea",
    "Coordinates",
    "Email",
    "EmployeeType",
    "UserRole",
    "UserStatus",
]
