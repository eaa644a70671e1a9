"""User response schemas (never include credential material)."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from swachh_api.schemas.common import AddressSchema, AssignedAreaSchema, CamelModel
from swachh_identity import EmployeeType, UserRole, UserStatus


class SupervisorResponse(CamelModel):
    id: UUID
    first_name: str
    last_name: str
    employee_id: Optional[str] = None
    employee_type: Optional[EmployeeType] = None


class UserResponse(CamelModel):
    """Public view of a citizen or employee."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    full_name: str
    phone_number: Optional[str] = None
    role: UserRole
    status: UserStatus
    is_email_verified: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    # Citizen
    address: Optional[AddressSchema] = None

    # Employee
    employee_type: Optional[EmployeeType] = None
    employee_id: Optional[str] = None
    department: Optional[str] = None
    supervisor_id: Optional[UUID] = None
    supervisor: Optional[SupervisorResponse] = None
    assigned_area: Optional[AssignedAreaSchema] = None


class UserData(CamelModel):
    user: UserResponse


class UserListData(CamelModel):
    users: list[UserResponse]
    count: int
