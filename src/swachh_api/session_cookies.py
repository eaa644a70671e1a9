"""Access/refresh token cookies.

Both cookies are:
- HttpOnly: Not accessible to JavaScript (XSS protection)
- Secure: Only sent over HTTPS (in production)
- SameSite=strict: Never sent on cross-site requests (CSRF protection)
"""

from fastapi import Response

from swachh_auth import TokenPair
from swachh_config import Settings

ACCESS_TOKEN_COOKIE = "accessToken"  # noqa: S105
REFRESH_TOKEN_COOKIE = "refreshToken"  # noqa: S105


def set_auth_cookies(response: Response, tokens: TokenPair, settings: Settings) -> None:
    """Set both token cookies with max-age equal to the token lifetimes."""
    _set_cookie(
        response,
        ACCESS_TOKEN_COOKIE,
        tokens.access_token,
        int(settings.access_token_ttl.total_seconds()),
        settings,
    )
    _set_cookie(
        response,
        REFRESH_TOKEN_COOKIE,
        tokens.refresh_token,
        int(settings.refresh_token_ttl.total_seconds()),
        settings,
    )


def clear_auth_cookies(response: Response, settings: Settings) -> None:
    """Expire both token cookies (for logout and password change)."""
    for key in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(
            key=key,
            path="/",
            domain=settings.api_cookie_domain,
            secure=settings.cookie_secure,
            httponly=True,
            samesite="strict",
        )


def _set_cookie(
    response: Response,
    key: str,
    value: str,
    max_age: int,
    settings: Settings,
) -> None:
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
        path="/",
        domain=settings.api_cookie_domain,
    )
