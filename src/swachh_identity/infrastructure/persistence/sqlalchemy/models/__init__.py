"""SQLAlchemy models for identity management."""

from swachh_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UQ_USERS_EMAIL,
    UQ_USERS_EMPLOYEE_ID,
    UserModel,
)

__all__ = [
    "UQ_USERS_EMAIL",
    "UQ_USERS_EMPLOYEE_ID",
    "UserModel",
]
