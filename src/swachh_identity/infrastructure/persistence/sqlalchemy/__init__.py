"""SQLAlchemy implementation for swachh_identity persistence.

Provides:
- IdentityBase: Declarative base for identity models
- UserModel: SQLAlchemy model for users
- UserRepositorySQLAlchemy: Repository implementation for users
- Engine/session/schema helpers
"""

from swachh_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase
from swachh_identity.infrastructure.persistence.sqlalchemy.database import (
    create_engine,
    create_session_maker,
    create_tables,
    drop_tables,
    ping,
)
from swachh_identity.infrastructure.persistence.sqlalchemy.models import UserModel
from swachh_identity.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "IdentityBase",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "create_engine",
    "create_session_maker",
    "create_tables",
    "drop_tables",
    "ping",
]
