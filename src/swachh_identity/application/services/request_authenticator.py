"""Per-request resolution of an access token into a user context."""

import asyncio
import logging
from typing import Optional
from uuid import UUID

from swachh_auth import InvalidTokenError, MissingTokenError, TokenService
from swachh_identity.application.context import UserContext
from swachh_identity.domain.exceptions import AccountStateError, AuthorizationError
from swachh_identity.domain.user import EmployeeType, UserRepository, UserRole

logger = logging.getLogger(__name__)

USER_NOT_FOUND_OR_INACTIVE = "User not found or inactive"


class RequestAuthenticator:
    """Turns an access token into a :class:`UserContext`.

    The steps are: token present, token verified, user loaded and active.
    Each step fails with its own exception so the transport can answer
    with the matching 401 message.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        token_service: TokenService,
        store_timeout: float = 5.0,
    ):
        self._users = user_repository
        self._tokens = token_service
        self._store_timeout = store_timeout

    async def authenticate(self, token: Optional[str]) -> UserContext:
        """Resolve the caller.

        Raises
        ------
        MissingTokenError
            If no token was presented
        InvalidTokenError
            If the token is invalid, expired or not an access token
        AccountStateError
            If the user no longer exists or is not active
        """
        if not token:
            raise MissingTokenError

        payload = self._tokens.verify_access(token)
        try:
            user_id = UUID(payload.user_id)
        except ValueError as e:
            raise InvalidTokenError(reason="bad subject") from e

        user = await asyncio.wait_for(
            self._users.find_by_id(user_id),
            timeout=self._store_timeout,
        )
        if user is None or not user.is_active:
            logger.info("Rejected token of missing or inactive user %s", user_id)
            raise AccountStateError(USER_NOT_FOUND_OR_INACTIVE)

        return UserContext.create(user)


def ensure_role(context: UserContext, allowed: tuple[UserRole, ...]) -> None:
    """Raise AuthorizationError unless the caller has one of the roles."""
    if context.role not in allowed:
        logger.info(
            "User %s (%s) denied: requires role %s",
            context.user_id,
            context.role.value,
            [role.value for role in allowed],
        )
        raise AuthorizationError


def ensure_employee_type(
    context: UserContext,
    allowed: tuple[EmployeeType, ...],
) -> None:
    """Raise AuthorizationError unless the caller is an employee of a type."""
    if not context.is_employee or context.employee_type not in allowed:
        logger.info(
            "User %s denied: requires employee type %s",
            context.user_id,
            [employee_type.value for employee_type in allowed],
        )
        raise AuthorizationError
