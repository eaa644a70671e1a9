"""Auth schemas and data structures.

These are simple data classes used for transferring token data
between components.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

ACCESS_TOKEN_TYPE = "access"  # noqa: S105
REFRESH_TOKEN_TYPE = "refresh"  # noqa: S105


class TokenSubject(Protocol):
    """Anything a token can be minted for (a user record or a context)."""

    @property
    def id(self) -> object: ...

    @property
    def email(self) -> str: ...

    @property
    def role(self) -> object: ...


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    This represents the data extracted from a verified JWT token.

    Attributes
    ----------
    user_id
        The user's identifier (string form, as carried in the token)
    email
        The user's email address
    role
        The user's role ("citizen" or "employee")
    token_type
        Either "access" or "refresh"
    issued_at
        Token issue timestamp
    expires_at
        Token expiration timestamp
    """

    user_id: str
    email: str
    role: str
    token_type: str
    issued_at: datetime
    expires_at: datetime

    def is_access_token(self) -> bool:
        """Check if this is an access token."""
        return self.token_type == ACCESS_TOKEN_TYPE

    def is_refresh_token(self) -> bool:
        """Check if this is a refresh token."""
        return self.token_type == REFRESH_TOKEN_TYPE


@dataclass(frozen=True)
class TokenPair:
    """An access/refresh token pair minted together."""

    access_token: str
    refresh_token: str

    def __repr__(self) -> str:
        # Never leak token material into logs
        return "TokenPair(access_token=***, refresh_token=***)"
