"""Session request/response schemas shared by citizens and employees."""

from typing import Optional

from pydantic import ConfigDict, Field

from swachh_api.schemas.common import CamelModel
from swachh_api.schemas.users import UserResponse


class LoginRequest(CamelModel):
    """Request schema for login.

    The email is not format-checked here: a malformed address must fail
    exactly like an unknown one.
    """

    email: str
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"email": "alice@example.com", "password": "Abc123!@#"},
        },
    )


class RefreshRequest(CamelModel):
    """Request schema for token refresh.

    The refresh token is optional here - if not provided in the request
    body, the server reads it from the ``refreshToken`` cookie instead.
    """

    refresh_token: Optional[str] = Field(
        default=None,
        description="Refresh token (optional - normally sent as HttpOnly cookie)",
    )


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str


class AuthData(CamelModel):
    """Payload of a successful register/login.

    The refresh token travels only in its HttpOnly cookie.
    """

    user: UserResponse
    access_token: str


class TokenData(CamelModel):
    access_token: str
