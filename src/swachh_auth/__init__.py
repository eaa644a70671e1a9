"""SwachhBuddy Auth - token and password primitives.

This package knows nothing about users or storage. It handles:
- Password hashing and strength validation (bcrypt)
- Access/refresh token minting and verification (JWT)
- Bearer header parsing

Architecture:
    swachh_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions
"""

from swachh_auth.exceptions import (
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    WeakPasswordError,
)
from swachh_auth.schemas import TokenPair, TokenPayload, TokenSubject
from swachh_auth.services import PasswordHashingService, TokenService

__all__ = [
    # Services
    "PasswordHashingService",
    "TokenService",
    # Schemas
    "TokenPair",
    "TokenPayload",
    "TokenSubject",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
    "WeakPasswordError",
    "InvalidCredentialsError",
    "MissingTokenError",
]
