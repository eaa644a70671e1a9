"""SQLAlchemy model for User aggregate."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from swachh_identity.domain.user.field_limits import (
    AREA_NAME_MAX_LENGTH,
    CITY_MAX_LENGTH,
    DEPARTMENT_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    EMPLOYEE_ID_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    PINCODE_LENGTH,
    STATE_MAX_LENGTH,
    STREET_MAX_LENGTH,
)
from swachh_identity.infrastructure.persistence.sqlalchemy.base import (
    IdentityBase,
    TimestampMixin,
)

UQ_USERS_EMAIL = "uq_users_email"
UQ_USERS_EMPLOYEE_ID = "uq_users_employee_id"


class UserModel(IdentityBase, TimestampMixin):
    """SQLAlchemy model for persisting User aggregates.

    Citizens and employees share this table; the address and the assigned
    area are flattened into columns.
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name=UQ_USERS_EMAIL),
        UniqueConstraint("employee_id", name=UQ_USERS_EMPLOYEE_ID),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH),
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    refresh_token_hash: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
    )

    first_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    phone_number: Mapped[Optional[str]] = mapped_column(
        String(PHONE_MAX_LENGTH),
        nullable=True,
    )

    role: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(20),
        default="active",
        nullable=False,
    )
    is_email_verified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    last_login: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Citizen address
    address_street: Mapped[Optional[str]] = mapped_column(String(STREET_MAX_LENGTH))
    address_city: Mapped[Optional[str]] = mapped_column(
        String(CITY_MAX_LENGTH),
        index=True,
    )
    address_state: Mapped[Optional[str]] = mapped_column(String(STATE_MAX_LENGTH))
    address_pincode: Mapped[Optional[str]] = mapped_column(String(PINCODE_LENGTH))
    address_latitude: Mapped[Optional[float]] = mapped_column(Float)
    address_longitude: Mapped[Optional[float]] = mapped_column(Float)

    # Employee fields
    employee_type: Mapped[Optional[str]] = mapped_column(String(32))
    employee_id: Mapped[Optional[str]] = mapped_column(
        String(EMPLOYEE_ID_MAX_LENGTH),
    )
    department: Mapped[Optional[str]] = mapped_column(
        String(DEPARTMENT_MAX_LENGTH),
        index=True,
    )
    supervisor_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    assigned_area_name: Mapped[Optional[str]] = mapped_column(
        String(AREA_NAME_MAX_LENGTH),
    )
    assigned_area_boundaries: Mapped[Optional[list[dict[str, Any]]]] = mapped_column(
        JSON,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email}, role={self.role})>"
