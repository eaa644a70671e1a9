"""Shared registration, login and session logic for citizens and employees."""

from __future__ import annotations

import asyncio
import hashlib
import hmac
import logging
from collections.abc import Awaitable, Mapping
from typing import Any, ClassVar, TypeVar, Union
from uuid import UUID

from swachh_auth import (
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    PasswordHashingService,
    TokenPair,
    TokenService,
)
from swachh_identity.application.dtos import (
    AuthResult,
    CitizenRegistration,
    EmployeeRegistration,
    SanitizedUser,
)
from swachh_identity.domain.exceptions import DependencyError, DomainException
from swachh_identity.domain.time import utc_now
from swachh_identity.domain.user import (
    AccountInactiveError,
    DuplicateEmailError,
    Email,
    MissingFieldsError,
    User,
    UserNotFoundError,
    UserRepository,
    UserRole,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Registration = Union[CitizenRegistration, EmployeeRegistration]


class IdentityService:
    """
    Application service for account lifecycle and sessions.

    Orchestrates swachh_auth (password hashing, JWT tokens) with the user
    repository. Subclasses bind the service to one role and add the
    role-specific operations.

    Every repository call is bounded by ``store_timeout`` and every bcrypt
    call by ``hash_timeout``. Timeouts and unexpected store failures
    surface as :class:`DependencyError`; domain and auth errors pass
    through unchanged.
    """

    role: ClassVar[UserRole]
    label: ClassVar[str] = "User"

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        token_service: TokenService,
        store_timeout: float = 5.0,
        hash_timeout: float = 10.0,
    ):
        self._users = user_repository
        self._passwords = password_service
        self._tokens = token_service
        self._store_timeout = store_timeout
        self._hash_timeout = hash_timeout

    async def register(self, data: Registration) -> AuthResult:
        missing = data.missing_fields()
        if missing:
            raise MissingFieldsError(missing)

        email = Email(data.email)
        if await self._store(self._users.exists_by_email(email)):
            raise DuplicateEmailError(email.value)

        await self._check_unique_identifiers(data)
        self._passwords.validate_strength(data.password)
        await self._check_references(data)

        password_hash = await self._hash_password(data.password)
        user = self._build_user(data, email, password_hash)
        await self._store(self._users.save(user))

        tokens = await self._issue_session(user)
        logger.info("%s registered: %s", self.label, user.email)
        return AuthResult(user=await self._sanitize(user), tokens=tokens)

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate with email and password.

        Unknown email and wrong password fail identically, and an unknown
        email still costs one bcrypt verification.

        Raises
        ------
        InvalidCredentialsError
            If no user of this role has the email or the password is wrong
        AccountInactiveError
            If the credentials are right but the account is not active
        """
        user = await self._store(
            self._users.find_by_email(email or "", role=self.role),
        )

        if user is None:
            await self._verify_password(password, self._passwords.dummy_hash)
            logger.info("Login failed for unknown %s email", self.label.lower())
            raise InvalidCredentialsError

        if not await self._verify_password(password, user.password_hash):
            logger.info("Login failed for %s: wrong password", user.id)
            raise InvalidCredentialsError

        if not user.is_active:
            raise AccountInactiveError(user.id)

        tokens = await self._issue_session(user)
        logger.info("%s logged in: %s", self.label, user.email)
        return AuthResult(user=await self._sanitize(user), tokens=tokens)

    async def logout(self, user_id: UUID) -> None:
        """Forget the stored refresh token. Never raises."""
        try:
            await self._store(self._users.set_refresh_token_hash(user_id, None))
            logger.info("%s logged out: %s", self.label, user_id)
        except Exception:
            logger.warning(
                "Could not clear refresh token on logout for %s",
                user_id,
                exc_info=True,
            )

    async def refresh_token(self, refresh_token: str) -> TokenPair:
        """Exchange a refresh token for a new pair (rotation).

        The presented token must be the one most recently issued to an
        existing, active user; afterwards it can never be used again.

        Raises
        ------
        InvalidTokenError
            If the token fails verification, belongs to an unknown or
            inactive user, or has been superseded
        """
        payload = self._tokens.verify_refresh(refresh_token)
        user_id = self._parse_token_subject(payload.user_id)

        user = await self._store(self._users.find_by_id(user_id))
        presented = self._hash_token(refresh_token)

        if (
            user is None
            or not user.is_active
            or user.refresh_token_hash is None
            or not hmac.compare_digest(user.refresh_token_hash, presented)
        ):
            logger.warning("Refresh token rejected for user %s", payload.user_id)
            raise InvalidTokenError("Invalid refresh token")

        tokens = self._tokens.issue_pair(user)
        await self._store(
            self._users.set_refresh_token_hash(
                user.id,
                self._hash_token(tokens.refresh_token),
            ),
        )

        logger.debug("Tokens refreshed for user: %s", user.id)
        return tokens

    async def get_profile(self, user_id: UUID) -> SanitizedUser:
        user = await self._get_active_user(user_id)
        return await self._sanitize(user)

    async def update_profile(
        self,
        user_id: UUID,
        changes: Mapping[str, Any],
    ) -> SanitizedUser:
        """Change editable profile fields.

        Keys that are not editable for the role (email, password, role,
        status, credentials and, for employees, employee id/type) are
        dropped without error.
        """
        user = await self._get_active_user(user_id)

        editable = user.editable_fields()
        patch = {key: value for key, value in changes.items() if key in editable}
        ignored = sorted(set(changes) - set(patch))
        if ignored:
            logger.debug("Ignoring non-editable profile fields: %s", ignored)

        patch = await self._prepare_patch(user, patch)
        user.update_profile(patch)
        await self._store(self._users.save(user))

        logger.info("%s profile updated: %s", self.label, user.email)
        return await self._sanitize(user)

    async def change_password(
        self,
        user_id: UUID,
        current_password: str,
        new_password: str,
    ) -> None:
        """Replace the password and end every session of the user.

        Raises
        ------
        InvalidCredentialsError
            If the current password is wrong
        WeakPasswordError
            If the new password does not meet the strength rules
        """
        user = await self._get_active_user(user_id)

        if not await self._verify_password(current_password, user.password_hash):
            msg = "Current password is incorrect"
            raise InvalidCredentialsError(msg)

        new_hash = await self._hash_password(new_password)
        user.change_password_hash(new_hash)
        await self._store(self._users.save(user))

        logger.info("Password changed for %s: %s", self.label.lower(), user.email)

    # -- hooks ---------------------------------------------------------------

    async def _check_unique_identifiers(self, data: Registration) -> None:
        """Role-specific uniqueness checks beyond the email."""

    async def _check_references(self, data: Registration) -> None:
        """Role-specific validation of references to other users."""

    def _build_user(self, data: Registration, email: Email, password_hash: str) -> User:
        raise NotImplementedError

    async def _prepare_patch(
        self,
        user: User,
        patch: dict[str, Any],
    ) -> dict[str, Any]:
        return patch

    async def _sanitize(self, user: User) -> SanitizedUser:
        return SanitizedUser.from_user(user)

    # -- helpers -------------------------------------------------------------

    async def _get_active_user(self, user_id: UUID) -> User:
        user = await self._store(self._users.find_by_id(user_id))
        if user is None or user.role != self.role or not user.is_active:
            raise UserNotFoundError(user_id, self.label)
        return user

    async def _issue_session(self, user: User) -> TokenPair:
        tokens = self._tokens.issue_pair(user)
        await self._store(
            self._users.set_refresh_token_hash(
                user.id,
                self._hash_token(tokens.refresh_token),
            ),
        )
        await self._store(self._users.touch_last_login(user.id, utc_now()))
        return tokens

    async def _hash_password(self, password: str) -> str:
        return await self._bounded(
            self._passwords.hash_async(password),
            self._hash_timeout,
            "password hashing",
        )

    async def _verify_password(self, password: str, password_hash: str) -> bool:
        return await self._bounded(
            self._passwords.verify_async(password or "", password_hash),
            self._hash_timeout,
            "password verification",
        )

    async def _store(self, awaitable: Awaitable[T]) -> T:
        return await self._bounded(awaitable, self._store_timeout, "credential store")

    async def _bounded(self, awaitable: Awaitable[T], timeout: float, what: str) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except (DomainException, AuthError):
            raise
        except asyncio.TimeoutError as e:
            logger.error("%s timed out after %.1fs", what, timeout)
            raise DependencyError(details={"dependency": what, "cause": "timeout"}) from e
        except Exception as e:
            logger.exception("%s failed", what)
            raise DependencyError(
                details={"dependency": what, "cause": type(e).__name__},
            ) from e

    @staticmethod
    def _hash_token(raw_token: str) -> str:
        return hashlib.sha256(raw_token.encode()).hexdigest()

    @staticmethod
    def _parse_token_subject(user_id: str) -> UUID:
        try:
            return UUID(user_id)
        except ValueError as e:
            raise InvalidTokenError("Invalid refresh token", reason="bad subject") from e
