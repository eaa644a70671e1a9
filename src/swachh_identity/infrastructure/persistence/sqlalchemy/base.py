"""Declarative base and shared columns."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from swachh_identity.domain.time import utc_now


class IdentityBase(DeclarativeBase):
    """Metadata root of the users table; ``create_tables`` builds from it."""


class TimestampMixin:
    """UTC creation and modification stamps, set by the ORM."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
