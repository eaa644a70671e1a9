"""Application services for identity management."""

from swachh_identity.application.services.citizen_service import CitizenService
from swachh_identity.application.services.employee_service import EmployeeService
from swachh_identity.application.services.identity_service import IdentityService
from swachh_identity.application.services.request_authenticator import (
    RequestAuthenticator,
    ensure_employee_type,
    ensure_role,
)

__all__ = [
    "CitizenService",
    "EmployeeService",
    "IdentityService",
    "RequestAuthenticator",
    "ensure_employee_type",
    "ensure_role",
]
