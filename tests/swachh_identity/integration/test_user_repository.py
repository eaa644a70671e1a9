"""Integration tests for UserRepositorySQLAlchemy."""

from datetime import timedelta

import pytest

from swachh_identity import (
    Address,
    AssignedArea,
    Coordinates,
    DuplicateEmailError,
    DuplicateEmployeeIdError,
    EmployeeType,
    User,
    UserRole,
    UserStatus,
)
from swachh_identity.domain.time import utc_now
from swachh_identity.domain.user import field_limits
from swachh_identity.infrastructure.persistence.sqlalchemy import (
    UserModel,
    UserRepositorySQLAlchemy,
)


class TestUserRepositorySaveAndFind:
    async def test_round_trip_through_a_fresh_session(self, session_maker):
        # Arrange
        user = User.create_citizen(
            email="alice@example.com",
            password_hash="hash",
            first_name="Alice",
            last_name="Sharma",
            phone_number="+91 98765 43210",
            address=Address(
                city="Pune",
                pincode="411001",
                coordinates=Coordinates(latitude=18.52, longitude=73.85),
            ),
        )
        async with session_maker() as session:
            await UserRepositorySQLAlchemy(session).save(user)
            await session.commit()

        # Act
        async with session_maker() as session:
            loaded = await UserRepositorySQLAlchemy(session).find_by_id(user.id)

        # Assert
        assert loaded == user
        assert loaded.email == "alice@example.com"
        assert loaded.phone_number == "+91 98765 43210"
        assert loaded.address == user.address
        assert loaded.role == UserRole.CITIZEN
        assert loaded.created_at.tzinfo is not None
        assert loaded.assigned_area is None

    async def test_employee_round_trip(self, session_maker, supervisor: User):
        # Arrange
        employee = User.create_employee(
            email="carl@example.com",
            password_hash="hash",
            first_name="Carl",
            last_name="Dsouza",
            employee_type=EmployeeType.DRIVER,
            employee_id="DRV-001",
            department="Transport",
            supervisor_id=supervisor.id,
            assigned_area=AssignedArea(
                name="Ward 7",
                boundaries=(Coordinates(latitude=1, longitude=2),),
            ),
        )
        async with session_maker() as session:
            repo = UserRepositorySQLAlchemy(session)
            await repo.save(supervisor)
            await repo.save(employee)
            await session.commit()

        # Act
        async with session_maker() as session:
            loaded = await UserRepositorySQLAlchemy(session).find_by_id(employee.id)

        # Assert
        assert loaded.employee_type == EmployeeType.DRIVER
        assert loaded.supervisor_id == supervisor.id
        assert loaded.assigned_area.name == "Ward 7"
        assert loaded.assigned_area.boundaries == (Coordinates(1.0, 2.0),)
        assert loaded.address is None

    async def test_find_by_email_is_case_insensitive_and_role_scoped(
        self,
        db_session,
        citizen: User,
    ):
        repo = UserRepositorySQLAlchemy(db_session)
        await repo.save(citizen)

        assert (await repo.find_by_email("ALICE@example.com")).id == citizen.id
        assert (await repo.find_by_email("alice@example.com", UserRole.CITIZEN))
        assert await repo.find_by_email("alice@example.com", UserRole.EMPLOYEE) is None
        assert await repo.exists_by_email("Alice@Example.com")
        assert not await repo.exists_by_email("bob@example.com")

    async def test_find_by_employee_id(self, db_session, admin: User):
        repo = UserRepositorySQLAlchemy(db_session)
        await repo.save(admin)

        assert (await repo.find_by_employee_id("ADM-001")).id == admin.id
        assert await repo.exists_by_employee_id(" ADM-001 ")
        assert not await repo.exists_by_employee_id("ADM-002")

    async def test_find_by_ids(self, db_session, supervisor: User, admin: User):
        repo = UserRepositorySQLAlchemy(db_session)
        await repo.save(supervisor)
        await repo.save(admin)

        found = await repo.find_by_ids([supervisor.id, admin.id])

        assert {user.id for user in found} == {supervisor.id, admin.id}
        assert await repo.find_by_ids([]) == []

    async def test_save_updates_existing(self, db_session, citizen: User):
        repo = UserRepositorySQLAlchemy(db_session)
        await repo.save(citizen)

        citizen.update_profile({"first_name": "Alicia"})
        await repo.save(citizen)

        assert (await repo.find_by_id(citizen.id)).first_name == "Alicia"
        assert await repo.count() == 1


class TestUserRepositoryUniqueness:
    async def test_duplicate_email_is_rejected_by_the_store(
        self,
        db_session,
        citizen: User,
    ):
        # Arrange
        repo = UserRepositorySQLAlchemy(db_session)
        await repo.save(citizen)
        twin = User.create_employee(
            email="alice@example.com",
            password_hash="hash",
            first_name="Alice",
            last_name="Twin",
            employee_type=EmployeeType.DRIVER,
            employee_id="DRV-009",
            department="Transport",
        )

        # Act & Assert
        with pytest.raises(DuplicateEmailError):
            await repo.save(twin)
        await db_session.rollback()

    async def test_duplicate_employee_id_is_rejected_by_the_store(
        self,
        db_session,
        supervisor: User,
    ):
        # Arrange
        repo = UserRepositorySQLAlchemy(db_session)
        await repo.save(supervisor)
        twin = User.create_employee(
            email="other@example.com",
            password_hash="hash",
            first_name="Other",
            last_name="Person",
            employee_type=EmployeeType.DRIVER,
            employee_id="SUP-001",
            department="Transport",
        )

        # Act & Assert
        with pytest.raises(DuplicateEmployeeIdError):
            await repo.save(twin)
        await db_session.rollback()

    async def test_citizens_without_employee_id_do_not_collide(self, db_session):
        repo = UserRepositorySQLAlchemy(db_session)
        for index in range(2):
            await repo.save(
                User.create_citizen(
                    email=f"c{index}@example.com",
                    password_hash="hash",
                    first_name="C",
                    last_name=str(index),
                ),
            )

        assert await repo.count() == 2


class TestUserRepositorySingleFieldWrites:
    async def test_refresh_token_hash_and_last_login(self, db_session, citizen: User):
        # Arrange
        repo = UserRepositorySQLAlchemy(db_session)
        await repo.save(citizen)
        login_at = utc_now() - timedelta(minutes=1)

        # Act
        await repo.set_refresh_token_hash(citizen.id, "a" * 64)
        await repo.touch_last_login(citizen.id, login_at)
        await db_session.commit()

        # Assert
        loaded = await repo.find_by_id(citizen.id)
        assert loaded.refresh_token_hash == "a" * 64
        assert loaded.last_login is not None

        await repo.set_refresh_token_hash(citizen.id, None)
        assert (await repo.find_by_id(citizen.id)).refresh_token_hash is None

    async def test_set_status_is_role_scoped(self, db_session, citizen: User):
        repo = UserRepositorySQLAlchemy(db_session)
        await repo.save(citizen)

        changed = await repo.set_status(
            citizen.id,
            UserRole.EMPLOYEE,
            UserStatus.SUSPENDED,
        )

        assert not changed
        assert (await repo.find_by_id(citizen.id)).status == UserStatus.ACTIVE

    async def test_set_status_can_clear_session(self, db_session, collector: User):
        # Arrange
        repo = UserRepositorySQLAlchemy(db_session)
        await repo.save(collector)
        await repo.set_refresh_token_hash(collector.id, "b" * 64)

        # Act
        changed = await repo.set_status(
            collector.id,
            UserRole.EMPLOYEE,
            UserStatus.SUSPENDED,
            clear_refresh_token=True,
        )

        # Assert
        loaded = await repo.find_by_id(collector.id)
        assert changed
        assert loaded.status == UserStatus.SUSPENDED
        assert loaded.refresh_token_hash is None


class TestUserRepositoryListings:
    async def test_search_citizens_by_location(self, db_session, citizen: User):
        # Arrange
        repo = UserRepositorySQLAlchemy(db_session)
        await repo.save(citizen)
        moved_away = User.create_citizen(
            email="goa@example.com",
            password_hash="hash",
            first_name="G",
            last_name="O",
            address=Address(city="Panaji", state="Goa"),
        )
        await repo.save(moved_away)
        inactive = User.create_citizen(
            email="gone@example.com",
            password_hash="hash",
            first_name="G",
            last_name="One",
            address=Address(city="Pune"),
        )
        await repo.save(inactive)
        await repo.set_status(inactive.id, UserRole.CITIZEN, UserStatus.INACTIVE)

        # Act & Assert
        assert [u.id for u in await repo.search_citizens_by_location("pun")] == [
            citizen.id,
        ]
        assert await repo.search_citizens_by_location("pune", "maha")
        assert await repo.search_citizens_by_location("pune", "goa") == []
        assert await repo.search_citizens_by_location("%") == []

    async def test_employee_listings(
        self,
        db_session,
        supervisor: User,
        collector: User,
        admin: User,
    ):
        # Arrange
        repo = UserRepositorySQLAlchemy(db_session)
        collector.update_profile({"assigned_area": {"name": "Ward 7"}})
        for user in (supervisor, collector, admin):
            await repo.save(user)

        # Act
        sanitation = await repo.list_employees_by_department("sanitation")
        collectors = await repo.list_employees_by_department(
            "Sanitation",
            EmployeeType.WASTE_COLLECTOR,
        )
        ward = await repo.list_employees_by_area("ward")
        subordinates = await repo.list_subordinates(supervisor.id)

        # Assert
        assert {u.id for u in sanitation} == {supervisor.id, collector.id}
        assert [u.id for u in collectors] == [collector.id]
        assert [u.id for u in ward] == [collector.id]
        assert [u.id for u in subordinates] == [collector.id]

    async def test_listings_skip_suspended_employees(
        self,
        db_session,
        supervisor: User,
        collector: User,
    ):
        repo = UserRepositorySQLAlchemy(db_session)
        await repo.save(supervisor)
        await repo.save(collector)
        await repo.set_status(collector.id, UserRole.EMPLOYEE, UserStatus.SUSPENDED)

        assert await repo.list_subordinates(supervisor.id) == []

    async def test_listing_limit(self, db_session):
        repo = UserRepositorySQLAlchemy(db_session)
        for index in range(3):
            await repo.save(
                User.create_employee(
                    email=f"d{index}@example.com",
                    password_hash="hash",
                    first_name="D",
                    last_name=str(index),
                    employee_type=EmployeeType.DRIVER,
                    employee_id=f"DRV-{index}",
                    department="Transport",
                ),
            )

        assert len(await repo.list_employees_by_department("Transport", limit=2)) == 2

    async def test_employee_statistics(
        self,
        db_session,
        supervisor: User,
        collector: User,
        admin: User,
        citizen: User,
    ):
        # Arrange
        repo = UserRepositorySQLAlchemy(db_session)
        for user in (supervisor, collector, admin, citizen):
            await repo.save(user)
        await repo.set_status(collector.id, UserRole.EMPLOYEE, UserStatus.SUSPENDED)

        # Act
        stats = await repo.employee_statistics()

        # Assert
        assert (stats.total, stats.active, stats.suspended) == (3, 2, 1)
        assert [
            (item.employee_type, item.count, item.active) for item in stats.by_type
        ] == [
            (EmployeeType.ADMIN, 1, 1),
            (EmployeeType.SUPERVISOR, 1, 1),
            (EmployeeType.WASTE_COLLECTOR, 1, 0),
        ]


class TestUserColumnLengths:
    @pytest.mark.parametrize(
        ("column", "max_length"),
        [
            ("email", field_limits.EMAIL_MAX_LENGTH),
            ("first_name", field_limits.NAME_MAX_LENGTH),
            ("last_name", field_limits.NAME_MAX_LENGTH),
            ("phone_number", field_limits.PHONE_MAX_LENGTH),
            ("address_street", field_limits.STREET_MAX_LENGTH),
            ("address_city", field_limits.CITY_MAX_LENGTH),
            ("address_state", field_limits.STATE_MAX_LENGTH),
            ("address_pincode", field_limits.PINCODE_LENGTH),
            ("employee_id", field_limits.EMPLOYEE_ID_MAX_LENGTH),
            ("department", field_limits.DEPARTMENT_MAX_LENGTH),
            ("assigned_area_name", field_limits.AREA_NAME_MAX_LENGTH),
        ],
    )
    def test_column_fits_domain_limit(self, column, max_length):
        assert UserModel.__table__.c[column].type.length == max_length
