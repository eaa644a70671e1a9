"""SQLAlchemy implementation of UserRepository."""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from sqlalchemy import case, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from swachh_identity.domain.time import as_utc, utc_now
from swachh_identity.domain.user import (
    Address,
    AssignedArea,
    Coordinates,
    DuplicateEmailError,
    DuplicateEmployeeIdError,
    Email,
    EmployeeCounts,
    EmployeeType,
    EmployeeTypeCount,
    User,
    UserRepository,
    UserRole,
    UserStatus,
)
from swachh_identity.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


def _normalize_email(email: Union[str, Email]) -> str:
    if isinstance(email, Email):
        return email.value
    return email.strip().lower()


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    Writes are flushed but never committed; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        model = await self._find_model_by_id(user_id)
        return self._map_to_domain(model) if model else None

    async def find_by_ids(self, user_ids: Iterable[UUID]) -> list[User]:
        ids = set(user_ids)
        if not ids:
            return []

        stmt = select(UserModel).where(UserModel.id.in_(ids))
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def find_by_email(
        self,
        email: Union[str, Email],
        role: Optional[UserRole] = None,
    ) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == _normalize_email(email))
        if role is not None:
            stmt = stmt.where(UserModel.role == role.value)

        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def find_by_employee_id(self, employee_id: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.employee_id == employee_id.strip())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        stmt = select(UserModel.id).where(UserModel.email == _normalize_email(email))
        result = await self._session.execute(stmt)
        return result.first() is not None

    async def exists_by_employee_id(self, employee_id: str) -> bool:
        stmt = select(UserModel.id).where(UserModel.employee_id == employee_id.strip())
        result = await self._session.execute(stmt)
        return result.first() is not None

    async def save(self, user: User) -> None:
        existing = await self._find_model_by_id(user.id)

        try:
            if existing:
                self._apply_to_model(existing, user)
                logger.debug("Updated user: %s", user.id)
            else:
                model = UserModel(id=user.id, created_at=user.created_at)
                self._apply_to_model(model, user)
                self._session.add(model)
                logger.info(
                    "Created %s: %s (email: %s)",
                    user.role.value,
                    user.id,
                    user.email,
                )

            await self._session.flush()
        except IntegrityError as e:
            message = str(e.orig).lower()
            if "employee_id" in message:
                raise DuplicateEmployeeIdError(user.employee_id or "") from e
            if "email" in message:
                raise DuplicateEmailError(user.email) from e
            raise

    async def set_refresh_token_hash(
        self,
        user_id: UUID,
        token_hash: Optional[str],
    ) -> None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(refresh_token_hash=token_hash, updated_at=utc_now())
        )
        await self._session.execute(stmt)

    async def touch_last_login(self, user_id: UUID, at: datetime) -> None:
        stmt = update(UserModel).where(UserModel.id == user_id).values(last_login=at)
        await self._session.execute(stmt)

    async def set_status(
        self,
        user_id: UUID,
        role: UserRole,
        status: UserStatus,
        clear_refresh_token: bool = False,
    ) -> bool:
        values: dict[str, object] = {"status": status.value, "updated_at": utc_now()}
        if clear_refresh_token:
            values["refresh_token_hash"] = None

        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id, UserModel.role == role.value)
            .values(**values)
        )
        result = await self._session.execute(stmt)
        changed = result.rowcount > 0
        if changed:
            logger.info("Set status of user %s to %s", user_id, status.value)
        return changed

    async def search_citizens_by_location(
        self,
        city: str,
        state: Optional[str] = None,
        limit: int = 100,
    ) -> list[User]:
        stmt = select(UserModel).where(
            UserModel.role == UserRole.CITIZEN.value,
            UserModel.status == UserStatus.ACTIVE.value,
            UserModel.address_city.icontains(city, autoescape=True),
        )
        if state:
            stmt = stmt.where(UserModel.address_state.icontains(state, autoescape=True))

        return await self._list(stmt, limit)

    async def list_employees_by_department(
        self,
        department: str,
        employee_type: Optional[EmployeeType] = None,
        limit: int = 100,
    ) -> list[User]:
        stmt = self._active_employees().where(
            UserModel.department.icontains(department, autoescape=True),
        )
        if employee_type is not None:
            stmt = stmt.where(UserModel.employee_type == employee_type.value)

        return await self._list(stmt, limit)

    async def list_employees_by_area(
        self,
        area_name: str,
        limit: int = 50,
    ) -> list[User]:
        stmt = self._active_employees().where(
            UserModel.assigned_area_name.icontains(area_name, autoescape=True),
        )
        return await self._list(stmt, limit)

    async def list_subordinates(
        self,
        supervisor_id: UUID,
        limit: int = 100,
    ) -> list[User]:
        stmt = self._active_employees().where(
            UserModel.supervisor_id == supervisor_id,
        )
        return await self._list(stmt, limit)

    async def employee_statistics(self) -> EmployeeCounts:
        active = func.sum(
            case((UserModel.status == UserStatus.ACTIVE.value, 1), else_=0),
        )
        suspended = func.sum(
            case((UserModel.status == UserStatus.SUSPENDED.value, 1), else_=0),
        )
        is_employee = UserModel.role == UserRole.EMPLOYEE.value

        totals = await self._session.execute(
            select(func.count(), active, suspended).where(is_employee),
        )
        total_count, active_count, suspended_count = totals.one()

        per_type = await self._session.execute(
            select(UserModel.employee_type, func.count(), active)
            .where(is_employee)
            .group_by(UserModel.employee_type)
            .order_by(UserModel.employee_type),
        )

        return EmployeeCounts(
            total=total_count or 0,
            active=active_count or 0,
            suspended=suspended_count or 0,
            by_type=[
                EmployeeTypeCount(
                    employee_type=EmployeeType(type_value) if type_value else None,
                    count=count,
                    active=type_active or 0,
                )
                for type_value, count, type_active in per_type.all()
            ],
        )

    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserModel)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    def _active_employees(self):
        return select(UserModel).where(
            UserModel.role == UserRole.EMPLOYEE.value,
            UserModel.status == UserStatus.ACTIVE.value,
        )

    async def _list(self, stmt, limit: int) -> list[User]:
        result = await self._session.execute(
            stmt.order_by(UserModel.created_at).limit(limit),
        )
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def _find_model_by_id(self, user_id: UUID) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            role=model.role,
            password_hash=model.password_hash,
            status=model.status,
            phone_number=model.phone_number,
            address=self._address_from_model(model),
            employee_type=model.employee_type,
            employee_id=model.employee_id,
            department=model.department,
            supervisor_id=model.supervisor_id,
            assigned_area=self._area_from_model(model),
            is_email_verified=model.is_email_verified,
            refresh_token_hash=model.refresh_token_hash,
            last_login=as_utc(model.last_login),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _apply_to_model(self, model: UserModel, user: User) -> None:
        model.email = user.email
        model.password_hash = user.password_hash
        model.refresh_token_hash = user.refresh_token_hash
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.phone_number = user.phone_number
        model.role = user.role.value
        model.status = user.status.value
        model.is_email_verified = user.is_email_verified
        model.last_login = user.last_login
        model.updated_at = user.updated_at

        address = user.address or Address()
        coordinates = address.coordinates
        model.address_street = address.street
        model.address_city = address.city
        model.address_state = address.state
        model.address_pincode = address.pincode
        model.address_latitude = coordinates.latitude if coordinates else None
        model.address_longitude = coordinates.longitude if coordinates else None

        model.employee_type = user.employee_type.value if user.employee_type else None
        model.employee_id = user.employee_id
        model.department = user.department
        model.supervisor_id = user.supervisor_id

        area = user.assigned_area
        model.assigned_area_name = area.name if area else None
        model.assigned_area_boundaries = area.boundaries_as_dicts() if area else None

    @staticmethod
    def _address_from_model(model: UserModel) -> Optional[Address]:
        coordinates = None
        if model.address_latitude is not None and model.address_longitude is not None:
            coordinates = Coordinates(
                latitude=model.address_latitude,
                longitude=model.address_longitude,
            )

        parts = (
            model.address_street,
            model.address_city,
            model.address_state,
            model.address_pincode,
        )
        if coordinates is None and all(part is None for part in parts):
            return None

        return Address(
            street=model.address_street,
            city=model.address_city,
            state=model.address_state,
            pincode=model.address_pincode,
            coordinates=coordinates,
        )

    @staticmethod
    def _area_from_model(model: UserModel) -> Optional[AssignedArea]:
        if model.assigned_area_name is None and not model.assigned_area_boundaries:
            return None
        return AssignedArea(
            name=model.assigned_area_name,
            boundaries=tuple(model.assigned_area_boundaries or ()),
        )
