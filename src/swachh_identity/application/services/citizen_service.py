"""Citizen accounts: self-service registration, profile and deactivation."""

import logging
from typing import Optional
from uuid import UUID

from swachh_identity.application.dtos import CitizenRegistration, SanitizedUser
from swachh_identity.application.services.identity_service import IdentityService
from swachh_identity.domain.exceptions import ValidationError
from swachh_identity.domain.user import (
    Address,
    Email,
    User,
    UserRole,
    UserStatus,
)

logger = logging.getLogger(__name__)


class CitizenService(IdentityService):
    """Identity operations for residents."""

    role = UserRole.CITIZEN
    label = "Citizen"

    LOCATION_LIMIT = 100

    def _build_user(
        self,
        data: CitizenRegistration,
        email: Email,
        password_hash: str,
    ) -> User:
        return User.create_citizen(
            email=email,
            password_hash=password_hash,
            first_name=data.first_name,
            last_name=data.last_name,
            phone_number=data.phone_number,
            address=Address.from_value(data.address) if data.address else None,
        )

    async def deactivate_account(self, user_id: UUID) -> None:
        """Self-service deactivation. There is no way back for citizens."""
        user = await self._get_active_user(user_id)
        await self._store(
            self._users.set_status(
                user.id,
                UserRole.CITIZEN,
                UserStatus.INACTIVE,
                clear_refresh_token=True,
            ),
        )
        logger.info("Citizen account deactivated: %s", user.email)

    async def get_citizens_by_location(
        self,
        city: str,
        state: Optional[str] = None,
    ) -> list[SanitizedUser]:
        if not city or not city.strip():
            msg = "City parameter is required"
            raise ValidationError(msg)

        citizens = await self._store(
            self._users.search_citizens_by_location(
                city.strip(),
                state.strip() if state else None,
                limit=self.LOCATION_LIMIT,
            ),
        )
        return [SanitizedUser.from_user(citizen) for citizen in citizens]
