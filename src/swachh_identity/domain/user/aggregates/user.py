"""User aggregate: citizens and municipal employees share one record."""

import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional, Union
from uuid import UUID, uuid4

from swachh_identity.domain.time import utc_now
from swachh_identity.domain.user.exceptions import InvalidProfileDataError
from swachh_identity.domain.user.field_limits import (
    DEPARTMENT_MAX_LENGTH,
    EMPLOYEE_ID_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PHONE_MAX_LENGTH,
)
from swachh_identity.domain.user.value_objects import (
    Address,
    AssignedArea,
    Email,
    EmployeeType,
    UserRole,
    UserStatus,
)

PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]{10,}$")

# Fields changeable through a profile update, per role
CITIZEN_PROFILE_FIELDS = frozenset(
    {"first_name", "last_name", "phone_number", "address"},
)
EMPLOYEE_PROFILE_FIELDS = frozenset(
    {
        "first_name",
        "last_name",
        "phone_number",
        "department",
        "supervisor_id",
        "assigned_area",
    },
)


def _clean_name(field: str, value: Any) -> str:
    text = str(value or "").strip()
    if not text:
        msg = f"{field} cannot be empty"
        raise InvalidProfileDataError(field, msg)
    if len(text) > NAME_MAX_LENGTH:
        msg = f"{field} cannot exceed {NAME_MAX_LENGTH} characters"
        raise InvalidProfileDataError(field, msg)
    return text


def _clean_phone(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if len(text) > PHONE_MAX_LENGTH or not PHONE_PATTERN.match(text):
        msg = "Please enter a valid phone number"
        raise InvalidProfileDataError("phone_number", msg)
    return text


def _clean_optional(field: str, value: Any, max_length: int) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if len(text) > max_length:
        msg = f"{field} cannot exceed {max_length} characters"
        raise InvalidProfileDataError(field, msg)
    return text or None


class User:
    """
    User aggregate root.

    Holds identity, credentials and profile of both citizens and employees.
    Employee-only attributes stay ``None`` for citizens and the citizen
    address stays ``None`` for employees.
    """

    def __init__(  # noqa: PLR0913
        self,
        email: Union[str, Email],
        first_name: str,
        last_name: str,
        role: Union[str, UserRole] = UserRole.CITIZEN,
        password_hash: str = "",
        status: Union[str, UserStatus] = UserStatus.ACTIVE,
        phone_number: Optional[str] = None,
        address: Optional[Address] = None,
        employee_type: Union[str, EmployeeType, None] = None,
        employee_id: Optional[str] = None,
        department: Optional[str] = None,
        supervisor_id: Optional[UUID] = None,
        assigned_area: Optional[AssignedArea] = None,
        is_email_verified: bool = False,
        refresh_token_hash: Optional[str] = None,
        last_login: Optional[datetime] = None,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._id = id or uuid4()
        self._email = email if isinstance(email, Email) else Email(email)
        self._first_name = _clean_name("first_name", first_name)
        self._last_name = _clean_name("last_name", last_name)
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._password_hash = password_hash
        self._status = status if isinstance(status, UserStatus) else UserStatus(status)
        self._phone_number = _clean_phone(phone_number)
        self._address = address
        self._employee_type = (
            EmployeeType(employee_type) if employee_type is not None else None
        )
        self._employee_id = _clean_optional(
            "employee_id",
            employee_id,
            EMPLOYEE_ID_MAX_LENGTH,
        )
        self._department = _clean_optional(
            "department",
            department,
            DEPARTMENT_MAX_LENGTH,
        )
        self._supervisor_id = supervisor_id
        self._assigned_area = assigned_area
        self._is_email_verified = is_email_verified
        self._refresh_token_hash = refresh_token_hash
        self._last_login = last_login
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def email_obj(self) -> Email:
        return self._email

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def phone_number(self) -> Optional[str]:
        return self._phone_number

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def status(self) -> UserStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status == UserStatus.ACTIVE

    @property
    def is_employee(self) -> bool:
        return self._role == UserRole.EMPLOYEE

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def refresh_token_hash(self) -> Optional[str]:
        return self._refresh_token_hash

    @property
    def address(self) -> Optional[Address]:
        return self._address

    @property
    def employee_type(self) -> Optional[EmployeeType]:
        return self._employee_type

    @property
    def employee_id(self) -> Optional[str]:
        return self._employee_id

    @property
    def department(self) -> Optional[str]:
        return self._department

    @property
    def supervisor_id(self) -> Optional[UUID]:
        return self._supervisor_id

    @property
    def assigned_area(self) -> Optional[AssignedArea]:
        return self._assigned_area

    @property
    def is_email_verified(self) -> bool:
        return self._is_email_verified

    @property
    def last_login(self) -> Optional[datetime]:
        return self._last_login

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def can_supervise(self) -> bool:
        """Whether other employees may report to this user."""
        return (
            self.is_employee
            and self._employee_type is not None
            and self._employee_type.can_supervise
        )

    def editable_fields(self) -> frozenset[str]:
        if self.is_employee:
            return EMPLOYEE_PROFILE_FIELDS
        return CITIZEN_PROFILE_FIELDS

    def update_profile(self, changes: Mapping[str, Any]) -> None:
        """Apply profile changes.

        Only fields returned by :meth:`editable_fields` are applied; any
        other key (email, role, status, credentials, employee id/type) is
        ignored. Values are validated before anything is changed.
        """
        allowed = {k: v for k, v in changes.items() if k in self.editable_fields()}
        if not allowed:
            return

        cleaned: dict[str, Any] = {}
        for key, value in allowed.items():
            if key in ("first_name", "last_name"):
                cleaned[key] = _clean_name(key, value)
            elif key == "phone_number":
                cleaned[key] = _clean_phone(value)
            elif key == "address":
                cleaned[key] = Address.from_value(value) if value is not None else None
            elif key == "assigned_area":
                cleaned[key] = (
                    AssignedArea.from_value(value) if value is not None else None
                )
            elif key == "department":
                department = _clean_optional(key, value, DEPARTMENT_MAX_LENGTH)
                if department is None:
                    msg = "department cannot be empty"
                    raise InvalidProfileDataError(key, msg)
                cleaned[key] = department
            elif key == "supervisor_id":
                cleaned[key] = value

        for key, value in cleaned.items():
            setattr(self, f"_{key}", value)
        self._updated_at = utc_now()

    def change_password_hash(self, new_hash: str) -> None:
        """Replace the password hash and drop the active refresh token."""
        self._password_hash = new_hash
        self._refresh_token_hash = None
        self._updated_at = utc_now()

    @classmethod
    def create_citizen(  # noqa: PLR0913
        cls,
        email: Union[str, Email],
        password_hash: str,
        first_name: str,
        last_name: str,
        phone_number: Optional[str] = None,
        address: Optional[Address] = None,
    ) -> "User":
        return cls(
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=UserRole.CITIZEN,
            phone_number=phone_number,
            address=address,
        )

    @classmethod
    def create_employee(  # noqa: PLR0913
        cls,
        email: Union[str, Email],
        password_hash: str,
        first_name: str,
        last_name: str,
        employee_type: Union[str, EmployeeType],
        employee_id: str,
        department: str,
        phone_number: Optional[str] = None,
        supervisor_id: Optional[UUID] = None,
        assigned_area: Optional[AssignedArea] = None,
    ) -> "User":
        return cls(
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=UserRole.EMPLOYEE,
            phone_number=phone_number,
            employee_type=employee_type,
            employee_id=employee_id,
            department=department,
            supervisor_id=supervisor_id,
            assigned_area=assigned_area,
        )

    @classmethod
    def reconstitute(cls, **fields: Any) -> "User":
        """Rebuild a user from persisted state."""
        return cls(**fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value}, role={self._role.value})"
