"""Unit tests for RequestAuthenticator and the role/type gates."""

from unittest.mock import AsyncMock

import pytest

from swachh_auth import InvalidTokenError, MissingTokenError, TokenService
from swachh_identity import (
    AccountStateError,
    AuthorizationError,
    EmployeeType,
    RequestAuthenticator,
    User,
    UserContext,
    UserRole,
    ensure_employee_type,
    ensure_role,
)


class TestRequestAuthenticator:
    def setup_method(self):
        self.user_repo = AsyncMock()
        self.token_service = TokenService(
            access_secret="access-secret",
            refresh_secret="refresh-secret",
        )
        self.authenticator = RequestAuthenticator(self.user_repo, self.token_service)

    @pytest.mark.parametrize("token", [None, ""])
    async def test_missing_token(self, token):
        with pytest.raises(MissingTokenError, match="Access token is required"):
            await self.authenticator.authenticate(token)

    async def test_invalid_token(self):
        with pytest.raises(InvalidTokenError, match="Invalid or expired token"):
            await self.authenticator.authenticate("not-a-jwt")

    async def test_refresh_token_is_rejected(self, citizen: User):
        pair = self.token_service.issue_pair(citizen)

        with pytest.raises(InvalidTokenError):
            await self.authenticator.authenticate(pair.refresh_token)

    async def test_unknown_user(self, citizen: User):
        pair = self.token_service.issue_pair(citizen)
        self.user_repo.find_by_id.return_value = None

        with pytest.raises(AccountStateError, match="User not found or inactive"):
            await self.authenticator.authenticate(pair.access_token)

    async def test_suspended_user(self, collector: User):
        pair = self.token_service.issue_pair(collector)
        self.user_repo.find_by_id.return_value = User.reconstitute(
            id=collector.id,
            email=collector.email,
            first_name=collector.first_name,
            last_name=collector.last_name,
            role=UserRole.EMPLOYEE,
            employee_type=EmployeeType.WASTE_COLLECTOR,
            status="suspended",
        )

        with pytest.raises(AccountStateError):
            await self.authenticator.authenticate(pair.access_token)

    async def test_resolves_context(self, admin: User):
        pair = self.token_service.issue_pair(admin)
        self.user_repo.find_by_id.return_value = admin

        context = await self.authenticator.authenticate(pair.access_token)

        assert context == UserContext(
            user_id=admin.id,
            email=admin.email,
            role=UserRole.EMPLOYEE,
            employee_type=EmployeeType.ADMIN,
        )
        assert context.is_admin
        self.user_repo.find_by_id.assert_awaited_once_with(admin.id)


class TestGates:
    def test_ensure_role(self, citizen: User):
        context = UserContext.create(citizen)

        ensure_role(context, (UserRole.CITIZEN,))
        with pytest.raises(AuthorizationError, match="Insufficient permissions"):
            ensure_role(context, (UserRole.EMPLOYEE,))

    def test_ensure_employee_type(self, admin: User, collector: User):
        ensure_employee_type(UserContext.create(admin), (EmployeeType.ADMIN,))

        with pytest.raises(AuthorizationError):
            ensure_employee_type(UserContext.create(collector), (EmployeeType.ADMIN,))

    def test_citizen_never_passes_employee_type_gate(self, citizen: User):
        with pytest.raises(AuthorizationError):
            ensure_employee_type(UserContext.create(citizen), (EmployeeType.ADMIN,))
