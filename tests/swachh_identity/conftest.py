"""
Pytest configuration for swachh_identity tests.

Provides ready-made citizens and employees built through the aggregate
factories, with a placeholder password hash.
"""

import pytest

from swachh_identity import Address, EmployeeType, User

PLACEHOLDER_HASH = "$2b$04$placeholderplaceholderplaceholderplaceholderpl"


@pytest.fixture
def citizen() -> User:
    """An active citizen living in Pune."""
    return User.create_citizen(
        email="alice@example.com",
        password_hash=PLACEHOLDER_HASH,
        first_name="Alice",
        last_name="Sharma",
        address=Address(city="Pune", state="Maharashtra", pincode="411001"),
    )


@pytest.fixture
def supervisor() -> User:
    """An active supervisor in the sanitation department."""
    return User.create_employee(
        email="sam@example.com",
        password_hash=PLACEHOLDER_HASH,
        first_name="Sam",
        last_name="Patil",
        employee_type=EmployeeType.SUPERVISOR,
        employee_id="SUP-001",
        department="Sanitation",
    )


@pytest.fixture
def collector(supervisor: User) -> User:
    """An active waste collector reporting to ``supervisor``."""
    return User.create_employee(
        email="carl@example.com",
        password_hash=PLACEHOLDER_HASH,
        first_name="Carl",
        last_name="Dsouza",
        employee_type=EmployeeType.WASTE_COLLECTOR,
        employee_id="WC-001",
        department="Sanitation",
        supervisor_id=supervisor.id,
    )


@pytest.fixture
def admin() -> User:
    """An active admin employee."""
    return User.create_employee(
        email="ada@example.com",
        password_hash=PLACEHOLDER_HASH,
        first_name="Ada",
        last_name="Kulkarni",
        employee_type=EmployeeType.ADMIN,
        employee_id="ADM-001",
        department="Administration",
    )
