"""Authentication services.

Provides password hashing and JWT token management.
"""

from swachh_auth.services.password_service import PasswordHashingService
from swachh_auth.services.token_service import TokenService

__all__ = [
    "PasswordHashingService",
    "TokenService",
]
