"""Unit tests for EmployeeService."""

from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from swachh_auth import PasswordHashingService, TokenService
from swachh_identity import (
    DuplicateEmployeeIdError,
    EmployeeCounts,
    EmployeeRegistration,
    EmployeeService,
    EmployeeType,
    EmployeeTypeCount,
    InvalidSupervisorError,
    MissingFieldsError,
    User,
    UserNotFoundError,
    UserRole,
    UserStatus,
    ValidationError,
)

TEST_PASSWORD = "Abc123!@#"  # noqa: S105


def _registration(**overrides) -> EmployeeRegistration:
    values = {
        "email": "carl@example.com",
        "password": TEST_PASSWORD,
        "first_name": "Carl",
        "last_name": "Dsouza",
        "employee_type": EmployeeType.WASTE_COLLECTOR,
        "employee_id": "WC-001",
        "department": "Sanitation",
    }
    values.update(overrides)
    return EmployeeRegistration(**values)


class EmployeeServiceTestBase:
    def setup_method(self):
        self.user_repo = AsyncMock()
        self.user_repo.exists_by_email.return_value = False
        self.user_repo.exists_by_employee_id.return_value = False

        self.password_service = Mock(spec=PasswordHashingService)
        self.password_service.hash_async = AsyncMock(return_value="hashed_password")
        self.password_service.verify_async = AsyncMock(return_value=True)
        self.password_service.dummy_hash = "dummy_hash"

        self.service = EmployeeService(
            user_repository=self.user_repo,
            password_service=self.password_service,
            token_service=TokenService(
                access_secret="access-secret",
                refresh_secret="refresh-secret",
            ),
        )


class TestEmployeeRegister(EmployeeServiceTestBase):
    """Tests for employee registration."""

    async def test_register_without_supervisor(self):
        # Act
        result = await self.service.register(_registration())

        # Assert
        saved_user = self.user_repo.save.call_args[0][0]
        assert saved_user.role == UserRole.EMPLOYEE
        assert saved_user.employee_type == EmployeeType.WASTE_COLLECTOR
        assert saved_user.employee_id == "WC-001"
        assert result.user.supervisor is None
        self.user_repo.exists_by_employee_id.assert_awaited_once_with("WC-001")

    async def test_register_with_supervisor(self, supervisor: User):
        # Arrange
        self.user_repo.find_by_id.return_value = supervisor

        # Act
        result = await self.service.register(
            _registration(supervisor_id=str(supervisor.id)),
        )

        # Assert
        saved_user = self.user_repo.save.call_args[0][0]
        assert saved_user.supervisor_id == supervisor.id
        assert result.user.supervisor.id == supervisor.id
        assert result.user.supervisor.employee_type == EmployeeType.SUPERVISOR

    async def test_register_reports_missing_employee_fields(self):
        with pytest.raises(MissingFieldsError) as exc_info:
            await self.service.register(
                _registration(employee_type=None, employee_id="", department=None),
            )

        assert exc_info.value.fields == ["employeeType", "employeeId", "department"]

    async def test_register_rejects_duplicate_employee_id(self):
        # Arrange
        self.user_repo.exists_by_employee_id.return_value = True

        # Act & Assert
        with pytest.raises(DuplicateEmployeeIdError):
            await self.service.register(_registration())

        self.user_repo.save.assert_not_called()

    async def test_register_rejects_unknown_employee_type(self):
        with pytest.raises(ValidationError, match="Invalid employee type"):
            await self.service.register(_registration(employee_type="janitor"))

    async def test_register_rejects_missing_supervisor(self):
        self.user_repo.find_by_id.return_value = None

        with pytest.raises(InvalidSupervisorError, match="Invalid supervisor ID"):
            await self.service.register(_registration(supervisor_id=uuid4()))

        self.user_repo.save.assert_not_called()

    async def test_register_rejects_non_supervising_supervisor(self, collector: User):
        self.user_repo.find_by_id.return_value = collector

        with pytest.raises(InvalidSupervisorError):
            await self.service.register(
                _registration(
                    employee_id="WC-002",
                    email="new@example.com",
                    supervisor_id=collector.id,
                ),
            )

    async def test_register_rejects_citizen_as_supervisor(self, citizen: User):
        self.user_repo.find_by_id.return_value = citizen

        with pytest.raises(InvalidSupervisorError):
            await self.service.register(_registration(supervisor_id=citizen.id))

    async def test_register_rejects_malformed_supervisor_id(self):
        with pytest.raises(InvalidSupervisorError):
            await self.service.register(_registration(supervisor_id="not-a-uuid"))

        self.user_repo.find_by_id.assert_not_called()


class TestEmployeeProfile(EmployeeServiceTestBase):
    """Tests for employee profile updates."""

    async def test_update_supervisor(self, collector: User, admin: User):
        # Arrange
        self.user_repo.find_by_id.side_effect = lambda user_id: {
            collector.id: collector,
            admin.id: admin,
        }.get(user_id)

        # Act
        profile = await self.service.update_profile(
            collector.id,
            {"supervisor_id": admin.id, "employee_type": "admin"},
        )

        # Assert
        assert profile.supervisor_id == admin.id
        assert profile.supervisor.id == admin.id
        assert profile.employee_type == EmployeeType.WASTE_COLLECTOR

    async def test_cannot_supervise_oneself(self, supervisor: User):
        self.user_repo.find_by_id.return_value = supervisor

        with pytest.raises(InvalidSupervisorError):
            await self.service.update_profile(
                supervisor.id,
                {"supervisor_id": supervisor.id},
            )

        self.user_repo.save.assert_not_called()


class TestEmployeeStatusChanges(EmployeeServiceTestBase):
    """Tests for admin suspend/reactivate."""

    async def test_suspend_clears_session(self):
        user_id = uuid4()
        self.user_repo.set_status.return_value = True

        await self.service.suspend_employee(user_id)

        self.user_repo.set_status.assert_awaited_once_with(
            user_id,
            UserRole.EMPLOYEE,
            UserStatus.SUSPENDED,
            clear_refresh_token=True,
        )

    async def test_reactivate(self):
        user_id = uuid4()
        self.user_repo.set_status.return_value = True

        await self.service.reactivate_employee(user_id)

        self.user_repo.set_status.assert_awaited_once_with(
            user_id,
            UserRole.EMPLOYEE,
            UserStatus.ACTIVE,
            clear_refresh_token=False,
        )

    async def test_suspend_unknown_employee(self):
        self.user_repo.set_status.return_value = False

        with pytest.raises(UserNotFoundError, match="Employee not found"):
            await self.service.suspend_employee(uuid4())


class TestEmployeeListings(EmployeeServiceTestBase):
    """Tests for department/area/subordinate listings and statistics."""

    async def test_by_department_attaches_supervisors(
        self,
        collector: User,
        supervisor: User,
    ):
        # Arrange
        self.user_repo.list_employees_by_department.return_value = [collector]
        self.user_repo.find_by_ids.return_value = [supervisor]

        # Act
        employees = await self.service.get_employees_by_department(
            "Sanitation",
            "waste_collector",
        )

        # Assert
        assert employees[0].supervisor.id == supervisor.id
        self.user_repo.list_employees_by_department.assert_awaited_once_with(
            "Sanitation",
            EmployeeType.WASTE_COLLECTOR,
            limit=EmployeeService.DEPARTMENT_LIMIT,
        )
        self.user_repo.find_by_ids.assert_awaited_once_with({supervisor.id})

    async def test_by_department_without_supervisors_skips_lookup(self, admin: User):
        self.user_repo.list_employees_by_department.return_value = [admin]

        employees = await self.service.get_employees_by_department("Administration")

        assert employees[0].supervisor is None
        self.user_repo.find_by_ids.assert_not_called()

    async def test_by_department_requires_department(self):
        with pytest.raises(ValidationError, match="Department parameter is required"):
            await self.service.get_employees_by_department(" ")

    async def test_by_area_requires_area(self):
        with pytest.raises(ValidationError, match="Area parameter is required"):
            await self.service.get_employees_by_area("")

    async def test_by_area(self, admin: User):
        self.user_repo.list_employees_by_area.return_value = [admin]

        employees = await self.service.get_employees_by_area("Ward 7")

        assert [e.id for e in employees] == [admin.id]
        self.user_repo.list_employees_by_area.assert_awaited_once_with(
            "Ward 7",
            limit=EmployeeService.AREA_LIMIT,
        )

    async def test_subordinates(self, supervisor: User, collector: User):
        self.user_repo.list_subordinates.return_value = [collector]

        subordinates = await self.service.get_subordinates(supervisor.id)

        assert [s.id for s in subordinates] == [collector.id]

    async def test_statistics(self):
        counts = EmployeeCounts(
            total=3,
            active=2,
            suspended=1,
            by_type=[EmployeeTypeCount(EmployeeType.DRIVER, 3, 2)],
        )
        self.user_repo.employee_statistics.return_value = counts

        assert await self.service.get_employee_statistics() == counts
