"""Employee request and response schemas."""

from typing import Any, Optional
from uuid import UUID

from pydantic import EmailStr

from swachh_api.schemas.common import AssignedAreaSchema, CamelModel
from swachh_identity import EmployeeCounts, EmployeeRegistration, EmployeeType


class EmployeeRegisterRequest(CamelModel):
    """Request schema for employee registration."""

    email: EmailStr
    password: str
    first_name: str
    last_name: str
    employee_type: EmployeeType
    employee_id: str
    department: str
    phone_number: Optional[str] = None
    supervisor_id: Optional[UUID] = None
    assigned_area: Optional[AssignedAreaSchema] = None

    def to_registration(self) -> EmployeeRegistration:
        return EmployeeRegistration(
            email=self.email,
            password=self.password,
            first_name=self.first_name,
            last_name=self.last_name,
            employee_type=self.employee_type,
            employee_id=self.employee_id,
            department=self.department,
            phone_number=self.phone_number,
            supervisor_id=self.supervisor_id,
            assigned_area=self.assigned_area.model_dump() if self.assigned_area else None,
        )


class EmployeeProfileUpdate(CamelModel):
    """Editable employee fields. Anything else in the body is ignored."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    department: Optional[str] = None
    supervisor_id: Optional[UUID] = None
    assigned_area: Optional[AssignedAreaSchema] = None

    def to_changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class EmployeeOverview(CamelModel):
    total_employees: int
    active_employees: int
    suspended_employees: int


class EmployeeTypeStats(CamelModel):
    employee_type: Optional[EmployeeType]
    count: int
    active: int


class EmployeeStatsData(CamelModel):
    overview: EmployeeOverview
    by_type: list[EmployeeTypeStats]

    @classmethod
    def from_counts(cls, counts: EmployeeCounts) -> "EmployeeStatsData":
        return cls(
            overview=EmployeeOverview(
                total_employees=counts.total,
                active_employees=counts.active,
                suspended_employees=counts.suspended,
            ),
            by_type=[
                EmployeeTypeStats(
                    employee_type=item.employee_type,
                    count=item.count,
                    active=item.active,
                )
                for item in counts.by_type
            ],
        )
