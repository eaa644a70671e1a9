"""Employee accounts: hierarchy, listings and admin status changes."""

import logging
from typing import Any, Optional, Union
from uuid import UUID

from swachh_identity.application.dtos import (
    EmployeeRegistration,
    SanitizedUser,
    SupervisorSummary,
)
from swachh_identity.application.services.identity_service import IdentityService
from swachh_identity.domain.exceptions import ValidationError
from swachh_identity.domain.user import (
    AssignedArea,
    DuplicateEmployeeIdError,
    Email,
    EmployeeCounts,
    EmployeeType,
    InvalidSupervisorError,
    User,
    UserNotFoundError,
    UserRole,
    UserStatus,
)

logger = logging.getLogger(__name__)


class EmployeeService(IdentityService):
    """Identity operations for municipal employees."""

    role = UserRole.EMPLOYEE
    label = "Employee"

    DEPARTMENT_LIMIT = 100
    AREA_LIMIT = 50
    SUBORDINATE_LIMIT = 100

    async def _check_unique_identifiers(self, data: EmployeeRegistration) -> None:
        employee_id = str(data.employee_id).strip()
        if await self._store(self._users.exists_by_employee_id(employee_id)):
            raise DuplicateEmployeeIdError(employee_id)

    async def _check_references(self, data: EmployeeRegistration) -> None:
        if data.supervisor_id:
            await self._validate_supervisor(data.supervisor_id)

    def _build_user(
        self,
        data: EmployeeRegistration,
        email: Email,
        password_hash: str,
    ) -> User:
        return User.create_employee(
            email=email,
            password_hash=password_hash,
            first_name=data.first_name,
            last_name=data.last_name,
            employee_type=self._parse_employee_type(data.employee_type),
            employee_id=str(data.employee_id),
            department=str(data.department),
            phone_number=data.phone_number,
            supervisor_id=self._parse_supervisor_id(data.supervisor_id),
            assigned_area=(
                AssignedArea.from_value(data.assigned_area)
                if data.assigned_area
                else None
            ),
        )

    async def _prepare_patch(
        self,
        user: User,
        patch: dict[str, Any],
    ) -> dict[str, Any]:
        supervisor_id = patch.get("supervisor_id")
        if supervisor_id is not None:
            patch["supervisor_id"] = await self._validate_supervisor(
                supervisor_id,
                employee_id=user.id,
            )
        return patch

    async def _sanitize(self, user: User) -> SanitizedUser:
        supervisor = None
        if user.supervisor_id is not None:
            found = await self._store(self._users.find_by_id(user.supervisor_id))
            if found is not None:
                supervisor = SupervisorSummary.from_user(found)
        return SanitizedUser.from_user(user, supervisor=supervisor)

    async def suspend_employee(self, user_id: UUID) -> None:
        """Suspend an employee and end their session (admin only)."""
        await self._change_status(user_id, UserStatus.SUSPENDED, clear_session=True)
        logger.info("Employee account suspended: %s", user_id)

    async def reactivate_employee(self, user_id: UUID) -> None:
        """Return a suspended or inactive employee to active (admin only)."""
        await self._change_status(user_id, UserStatus.ACTIVE, clear_session=False)
        logger.info("Employee account reactivated: %s", user_id)

    async def get_employees_by_department(
        self,
        department: str,
        employee_type: Union[EmployeeType, str, None] = None,
    ) -> list[SanitizedUser]:
        if not department or not department.strip():
            msg = "Department parameter is required"
            raise ValidationError(msg)

        employees = await self._store(
            self._users.list_employees_by_department(
                department.strip(),
                self._parse_employee_type(employee_type) if employee_type else None,
                limit=self.DEPARTMENT_LIMIT,
            ),
        )
        return await self._with_supervisors(employees)

    async def get_employees_by_area(self, area_name: str) -> list[SanitizedUser]:
        if not area_name or not area_name.strip():
            msg = "Area parameter is required"
            raise ValidationError(msg)

        employees = await self._store(
            self._users.list_employees_by_area(
                area_name.strip(),
                limit=self.AREA_LIMIT,
            ),
        )
        return await self._with_supervisors(employees)

    async def get_subordinates(self, supervisor_id: UUID) -> list[SanitizedUser]:
        subordinates = await self._store(
            self._users.list_subordinates(supervisor_id, limit=self.SUBORDINATE_LIMIT),
        )
        return [SanitizedUser.from_user(employee) for employee in subordinates]

    async def get_employee_statistics(self) -> EmployeeCounts:
        return await self._store(self._users.employee_statistics())

    async def _change_status(
        self,
        user_id: UUID,
        status: UserStatus,
        clear_session: bool,
    ) -> None:
        changed = await self._store(
            self._users.set_status(
                user_id,
                UserRole.EMPLOYEE,
                status,
                clear_refresh_token=clear_session,
            ),
        )
        if not changed:
            raise UserNotFoundError(user_id, self.label)

    async def _validate_supervisor(
        self,
        supervisor_id: Union[UUID, str],
        employee_id: Optional[UUID] = None,
    ) -> UUID:
        """Resolve a supervisor reference.

        Best effort: the supervisor may change between this check and the
        write that references it.
        """
        parsed = self._parse_supervisor_id(supervisor_id)
        if parsed is None or parsed == employee_id:
            raise InvalidSupervisorError(supervisor_id)

        supervisor = await self._store(self._users.find_by_id(parsed))
        if supervisor is None or not supervisor.can_supervise:
            raise InvalidSupervisorError(supervisor_id)

        return parsed

    async def _with_supervisors(self, employees: list[User]) -> list[SanitizedUser]:
        supervisor_ids = {e.supervisor_id for e in employees if e.supervisor_id}
        supervisors: dict[UUID, SupervisorSummary] = {}
        if supervisor_ids:
            found = await self._store(self._users.find_by_ids(supervisor_ids))
            supervisors = {s.id: SupervisorSummary.from_user(s) for s in found}

        return [
            SanitizedUser.from_user(
                employee,
                supervisor=supervisors.get(employee.supervisor_id),
            )
            for employee in employees
        ]

    @staticmethod
    def _parse_supervisor_id(value: Union[UUID, str, None]) -> Optional[UUID]:
        if value is None or isinstance(value, UUID):
            return value
        try:
            return UUID(str(value))
        except ValueError as e:
            raise InvalidSupervisorError(value) from e

    @staticmethod
    def _parse_employee_type(value: Union[EmployeeType, str, None]) -> EmployeeType:
        try:
            return EmployeeType(value)
        except ValueError as e:
            msg = f"Invalid employee type: {value}"
            raise ValidationError(msg, details={"field": "employeeType"}) from e
