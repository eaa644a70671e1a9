"""User repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from swachh_identity.domain.user.aggregates.user import User
from swachh_identity.domain.user.value_objects import (
    Email,
    EmployeeType,
    UserRole,
    UserStatus,
)


@dataclass(frozen=True)
class EmployeeTypeCount:
    employee_type: Optional[EmployeeType]
    count: int
    active: int


@dataclass(frozen=True)
class EmployeeCounts:
    """Aggregate employee counts, overall and per employee type."""

    total: int = 0
    active: int = 0
    suspended: int = 0
    by_type: list[EmployeeTypeCount] = field(default_factory=list)


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Listing methods only return active users and never more than ``limit``
    rows. Implementations enforce email and employee-id uniqueness.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_ids(self, user_ids: Iterable[UUID]) -> list[User]:
        """Find every user whose ID is in ``user_ids``."""

    @abstractmethod
    async def find_by_email(
        self,
        email: Union[str, Email],
        role: Optional[UserRole] = None,
    ) -> Optional[User]:
        """Find a user by email address, optionally scoped to a role."""

    @abstractmethod
    async def find_by_employee_id(self, employee_id: str) -> Optional[User]:
        """Find an employee by their employee identifier."""

    @abstractmethod
    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        """Check if any user, of any role, has the given email."""

    @abstractmethod
    async def exists_by_employee_id(self, employee_id: str) -> bool:
        """Check if the employee identifier is already taken."""

    @abstractmethod
    async def save(self, user: User) -> None:
        """Insert or update a user.

        Raises
        ------
        DuplicateEmailError
            If another user already has this email
        DuplicateEmployeeIdError
            If another user already has this employee identifier
        """

    @abstractmethod
    async def set_refresh_token_hash(
        self,
        user_id: UUID,
        token_hash: Optional[str],
    ) -> None:
        """Store (or clear, with ``None``) the active refresh token hash."""

    @abstractmethod
    async def touch_last_login(self, user_id: UUID, at: datetime) -> None:
        """Stamp the last successful login."""

    @abstractmethod
    async def set_status(
        self,
        user_id: UUID,
        role: UserRole,
        status: UserStatus,
        clear_refresh_token: bool = False,
    ) -> bool:
        """Change account status of a user with the given role.

        Returns False when no such user exists.
        """

    @abstractmethod
    async def search_citizens_by_location(
        self,
        city: str,
        state: Optional[str] = None,
        limit: int = 100,
    ) -> list[User]:
        """Active citizens whose address matches city (and state)."""

    @abstractmethod
    async def list_employees_by_department(
        self,
        department: str,
        employee_type: Optional[EmployeeType] = None,
        limit: int = 100,
    ) -> list[User]:
        """Active employees whose department matches."""

    @abstractmethod
    async def list_employees_by_area(
        self,
        area_name: str,
        limit: int = 50,
    ) -> list[User]:
        """Active employees whose assigned area name matches."""

    @abstractmethod
    async def list_subordinates(
        self,
        supervisor_id: UUID,
        limit: int = 100,
    ) -> list[User]:
        """Active employees reporting to the given supervisor."""

    @abstractmethod
    async def employee_statistics(self) -> EmployeeCounts:
        """Count employees overall, by status and by type."""

    @abstractmethod
    async def count(self) -> int:
        """Count total users."""
