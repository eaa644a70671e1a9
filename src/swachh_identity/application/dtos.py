"""Data transfer objects returned by the identity services.

Nothing in here carries a password hash or a refresh token hash: these
are the only user shapes that leave the application layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union
from uuid import UUID

from swachh_auth import TokenPair
from swachh_identity.domain.user import (
    Address,
    AssignedArea,
    EmployeeType,
    User,
    UserRole,
    UserStatus,
)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True)
class CitizenRegistration:
    """Input of a citizen sign-up."""

    email: str
    password: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    address: Union[Address, Mapping[str, Any], None] = None

    # (attribute, public field name) pairs that must be present
    REQUIRED = (
        ("email", "email"),
        ("password", "password"),
        ("first_name", "firstName"),
        ("last_name", "lastName"),
    )

    def missing_fields(self) -> list[str]:
        return [name for attr, name in self.REQUIRED if _is_blank(getattr(self, attr))]


@dataclass(frozen=True)
class EmployeeRegistration:
    """Input of an employee sign-up."""

    email: str
    password: str
    first_name: str
    last_name: str
    employee_type: Union[EmployeeType, str, None]
    employee_id: Optional[str]
    department: Optional[str]
    phone_number: Optional[str] = None
    supervisor_id: Union[UUID, str, None] = None
    assigned_area: Union[AssignedArea, Mapping[str, Any], None] = None

    REQUIRED = (
        *CitizenRegistration.REQUIRED,
        ("employee_type", "employeeType"),
        ("employee_id", "employeeId"),
        ("department", "department"),
    )

    def missing_fields(self) -> list[str]:
        return [name for attr, name in self.REQUIRED if _is_blank(getattr(self, attr))]


@dataclass(frozen=True)
class SupervisorSummary:
    """Display-safe subset of a supervisor's record."""

    id: UUID
    first_name: str
    last_name: str
    employee_id: Optional[str]
    employee_type: Optional[EmployeeType]

    @classmethod
    def from_user(cls, user: User) -> SupervisorSummary:
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            employee_id=user.employee_id,
            employee_type=user.employee_type,
        )


@dataclass(frozen=True)
class SanitizedUser:
    """A user without credential material."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: UserRole
    status: UserStatus
    is_email_verified: bool
    created_at: datetime
    updated_at: datetime
    phone_number: Optional[str] = None
    last_login: Optional[datetime] = None
    address: Optional[Address] = None
    employee_type: Optional[EmployeeType] = None
    employee_id: Optional[str] = None
    department: Optional[str] = None
    supervisor_id: Optional[UUID] = None
    supervisor: Optional[SupervisorSummary] = None
    assigned_area: Optional[AssignedArea] = None

    @classmethod
    def from_user(
        cls,
        user: User,
        supervisor: Optional[SupervisorSummary] = None,
    ) -> SanitizedUser:
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            role=user.role,
            status=user.status,
            is_email_verified=user.is_email_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
            phone_number=user.phone_number,
            last_login=user.last_login,
            address=user.address,
            employee_type=user.employee_type,
            employee_id=user.employee_id,
            department=user.department,
            supervisor_id=user.supervisor_id,
            supervisor=supervisor,
            assigned_area=user.assigned_area,
        )


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful register or login."""

    user: SanitizedUser
    tokens: TokenPair
