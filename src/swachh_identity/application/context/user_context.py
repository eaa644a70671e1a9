"""Identity of the caller, resolved once per request from the access token."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from swachh_identity.domain.user.value_objects import EmployeeType, UserRole

if TYPE_CHECKING:
    from swachh_identity.domain.user import User


@dataclass(frozen=True)
class UserContext:
    """Who is calling: enough to authorize without another store lookup."""

    user_id: UUID
    email: str
    role: UserRole
    employee_type: Optional[EmployeeType] = None

    @classmethod
    def create(cls, user: User) -> UserContext:
        return cls(
            user_id=user.id,
            email=user.email,
            role=user.role,
            employee_type=user.employee_type,
        )

    @property
    def id(self) -> UUID:
        return self.user_id

    @property
    def is_employee(self) -> bool:
        return self.role == UserRole.EMPLOYEE

    @property
    def is_admin(self) -> bool:
        return self.is_employee and self.employee_type == EmployeeType.ADMIN

    def __str__(self) -> str:
        return f"{self.role.value}:{self.user_id}"
