"""FastAPI dependency injection for the auth API.

Provides dependencies for:
- Database sessions and transactions
- Token and password services (shared, created by the app factory)
- Identity services (citizen / employee), one per request
- Authentication (current user from access token)
- Role and employee-type gates
"""

import logging
from collections.abc import Awaitable
from typing import Annotated, AsyncGenerator, Callable, Optional, TypeVar

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from swachh_api.config import SettingsDep
from swachh_api.session_cookies import ACCESS_TOKEN_COOKIE
from swachh_auth import (
    AuthError,
    PasswordHashingService,
    TokenService,
)
from swachh_identity import (
    AccountStateError,
    AuthorizationError,
    CitizenService,
    EmployeeService,
    EmployeeType,
    RequestAuthenticator,
    UserContext,
    UserRole,
    ensure_employee_type,
    ensure_role,
)
from swachh_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


# -----------------------------------------------------------------------------
# Database Session
# -----------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request from the application's
    session maker. Routers decide when to commit.

    Yields
    ------
    AsyncSession for database operations
    """
    async with request.app.state.session_maker() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


async def run_in_transaction(session: AsyncSession, operation: Awaitable[T]) -> T:
    """Await a service operation and commit; roll back if it fails."""
    try:
        result = await operation
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    return result


# -----------------------------------------------------------------------------
# Services
# -----------------------------------------------------------------------------


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_service(request: Request) -> PasswordHashingService:
    return request.app.state.password_service


TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]


def get_citizen_service(
    session: DBSession,
    settings: SettingsDep,
    token_service: TokenServiceDep,
    password_service: PasswordServiceDep,
) -> CitizenService:
    return CitizenService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=password_service,
        token_service=token_service,
        store_timeout=settings.store_timeout_seconds,
        hash_timeout=settings.hash_timeout_seconds,
    )


def get_employee_service(
    session: DBSession,
    settings: SettingsDep,
    token_service: TokenServiceDep,
    password_service: PasswordServiceDep,
) -> EmployeeService:
    return EmployeeService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=password_service,
        token_service=token_service,
        store_timeout=settings.store_timeout_seconds,
        hash_timeout=settings.hash_timeout_seconds,
    )


CitizenServiceDep = Annotated[CitizenService, Depends(get_citizen_service)]
EmployeeServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]


# -----------------------------------------------------------------------------
# Authentication
# -----------------------------------------------------------------------------


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_access_token(request: Request) -> Optional[str]:
    """Bearer header first, then the ``accessToken`` cookie."""
    header_token = TokenService.extract_bearer_token(
        request.headers.get("Authorization"),
    )
    return header_token or request.cookies.get(ACCESS_TOKEN_COOKIE)


async def get_current_user(
    request: Request,
    session: DBSession,
    settings: SettingsDep,
    token_service: TokenServiceDep,
) -> UserContext:
    """
    Get the current authenticated user from the access token.

    Returns
    -------
    UserContext of the authenticated, active user

    Raises
    ------
    HTTPException
        401 if the token is missing or invalid, the user no longer exists
        or is not active, or resolution fails unexpectedly
    """
    authenticator = RequestAuthenticator(
        UserRepositorySQLAlchemy(session),
        token_service,
        store_timeout=settings.store_timeout_seconds,
    )

    try:
        return await authenticator.authenticate(extract_access_token(request))
    except (AuthError, AccountStateError) as e:
        raise _unauthorized(e.message) from e
    except Exception as e:
        logger.exception("Authentication failed unexpectedly")
        raise _unauthorized("Authentication failed") from e


async def get_current_user_optional(
    request: Request,
    session: DBSession,
    settings: SettingsDep,
    token_service: TokenServiceDep,
) -> Optional[UserContext]:
    """Like get_current_user, but anonymous instead of 401."""
    try:
        return await get_current_user(request, session, settings, token_service)
    except HTTPException:
        return None


CurrentUser = Annotated[UserContext, Depends(get_current_user)]
OptionalCurrentUser = Annotated[
    Optional[UserContext],
    Depends(get_current_user_optional),
]


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[UserContext]]:
    """Build a dependency that only admits the given roles (403 otherwise)."""

    async def dependency(current_user: CurrentUser) -> UserContext:
        try:
            ensure_role(current_user, roles)
        except AuthorizationError as e:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=e.message,
            ) from e
        return current_user

    return dependency


def require_employee_types(
    *employee_types: EmployeeType,
) -> Callable[..., Awaitable[UserContext]]:
    """Build a dependency that only admits employees of the given types."""

    async def dependency(current_user: CurrentUser) -> UserContext:
        try:
            ensure_employee_type(current_user, employee_types)
        except AuthorizationError as e:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=e.message,
            ) from e
        return current_user

    return dependency


CurrentCitizen = Annotated[UserContext, Depends(require_roles(UserRole.CITIZEN))]
CurrentEmployee = Annotated[UserContext, Depends(require_roles(UserRole.EMPLOYEE))]
AdminEmployee = Annotated[
    UserContext,
    Depends(require_employee_types(EmployeeType.ADMIN)),
]
