"""Session endpoints shared by the citizen and employee routers.

Login, logout, refresh, profile read and password change behave the
same for both roles; only the identity service and the role gate differ.
"""

import logging
from typing import Annotated, Callable, Optional
from uuid import UUID

from fastapi import APIRouter, Cookie, Depends, Response

from swachh_api.config import SettingsDep
from swachh_api.dependencies import (
    DBSession,
    OptionalCurrentUser,
    TokenServiceDep,
    require_roles,
    run_in_transaction,
)
from swachh_api.schemas import (
    ApiResponse,
    AuthData,
    ChangePasswordRequest,
    LoginRequest,
    RefreshRequest,
    TokenData,
    UserData,
    UserResponse,
)
from swachh_api.session_cookies import (
    REFRESH_TOKEN_COOKIE,
    clear_auth_cookies,
    set_auth_cookies,
)
from swachh_auth import InvalidTokenError, MissingTokenError, TokenService
from swachh_identity import AuthResult, IdentityService, UserContext, UserRole

logger = logging.getLogger(__name__)

RefreshCookie = Annotated[Optional[str], Cookie(alias=REFRESH_TOKEN_COOKIE)]


def auth_data(result: AuthResult) -> AuthData:
    return AuthData(
        user=UserResponse.model_validate(result.user),
        access_token=result.tokens.access_token,
    )


def _user_id_from_refresh_token(
    token_service: TokenService,
    refresh_token: Optional[str],
) -> Optional[UUID]:
    """Subject of a still-valid refresh token, or None."""
    if not refresh_token:
        return None
    try:
        return UUID(token_service.verify_refresh(refresh_token).user_id)
    except (InvalidTokenError, ValueError):
        return None


def add_session_routes(
    router: APIRouter,
    get_service: Callable[..., IdentityService],
    role: UserRole,
) -> None:
    """Mount login/logout/refresh/profile/change-password on ``router``."""
    ServiceDep = Annotated[IdentityService, Depends(get_service)]
    RoleUser = Annotated[UserContext, Depends(require_roles(role))]
    label = role.value.capitalize()

    @router.post(
        "/login",
        summary=f"Login as {role.value}",
        responses={
            200: {"description": "Login successful"},
            401: {"description": "Invalid credentials or inactive account"},
        },
    )
    async def login(
        body: LoginRequest,
        response: Response,
        service: ServiceDep,
        session: DBSession,
        settings: SettingsDep,
    ) -> ApiResponse[AuthData]:
        """
        Authenticate with email and password.

        Sets the ``accessToken`` and ``refreshToken`` HttpOnly cookies and
        returns the access token in the body as well.
        """
        result = await run_in_transaction(
            session,
            service.login(body.email, body.password),
        )
        set_auth_cookies(response, result.tokens, settings)
        return ApiResponse(message="Login successful", data=auth_data(result))

    @router.post(
        "/logout",
        summary="Logout",
        responses={200: {"description": "Logout successful"}},
    )
    async def logout(
        response: Response,
        service: ServiceDep,
        session: DBSession,
        settings: SettingsDep,
        token_service: TokenServiceDep,
        current_user: OptionalCurrentUser,
        refresh_cookie: RefreshCookie = None,
    ) -> ApiResponse:
        """
        End the session.

        Always succeeds and always clears the cookies. The stored refresh
        token is forgotten when the caller can be identified by a valid
        access token or, failing that, a valid refresh token.
        """
        user_id = (
            current_user.user_id
            if current_user
            else _user_id_from_refresh_token(token_service, refresh_cookie)
        )

        if user_id is not None:
            await service.logout(user_id)
            try:
                await session.commit()
            except Exception:
                logger.warning("Could not commit logout for %s", user_id, exc_info=True)

        clear_auth_cookies(response, settings)
        return ApiResponse(message="Logout successful")

    @router.post(
        "/refresh-token",
        summary="Refresh access token",
        responses={
            200: {"description": "Token refreshed successfully"},
            401: {"description": "Missing, invalid or superseded refresh token"},
        },
    )
    async def refresh_token(
        response: Response,
        service: ServiceDep,
        session: DBSession,
        settings: SettingsDep,
        body: Optional[RefreshRequest] = None,
        refresh_cookie: RefreshCookie = None,
    ) -> ApiResponse[TokenData]:
        """
        Exchange a refresh token for a new token pair.

        The refresh token is read from the HttpOnly cookie, or from the
        request body. The presented token is invalidated (rotation).
        """
        token = refresh_cookie or (body.refresh_token if body else None)
        if not token:
            msg = "Refresh token not provided"
            raise MissingTokenError(msg)

        tokens = await run_in_transaction(session, service.refresh_token(token))
        set_auth_cookies(response, tokens, settings)
        return ApiResponse(
            message="Token refreshed successfully",
            data=TokenData(access_token=tokens.access_token),
        )

    @router.get("/profile", summary=f"Get {role.value} profile")
    async def get_profile(
        current_user: RoleUser,
        service: ServiceDep,
    ) -> ApiResponse[UserData]:
        user = await service.get_profile(current_user.user_id)
        return ApiResponse(
            message="Profile retrieved successfully",
            data=UserData(user=UserResponse.model_validate(user)),
        )

    @router.post(
        "/change-password",
        summary="Change password",
        responses={
            200: {"description": "Password changed, all sessions ended"},
            400: {"description": "New password too weak"},
            401: {"description": "Current password is incorrect"},
        },
    )
    async def change_password(
        body: ChangePasswordRequest,
        response: Response,
        current_user: RoleUser,
        service: ServiceDep,
        session: DBSession,
        settings: SettingsDep,
    ) -> ApiResponse:
        """Change the password. Every session ends; the user must log in again."""
        await run_in_transaction(
            session,
            service.change_password(
                current_user.user_id,
                body.current_password,
                body.new_password,
            ),
        )
        clear_auth_cookies(response, settings)
        logger.info("%s %s changed password", label, current_user.user_id)
        return ApiResponse(message="Password changed successfully. Please login again.")
