from enum import Enum


class EmployeeType(str, Enum):
    """Kinds of municipal employees."""

    WASTE_COLLECTOR = "waste_collector"
    SUPERVISOR = "supervisor"
    ADMIN = "admin"
    DRIVER = "driver"

    @property
    def can_supervise(self) -> bool:
        return self in (EmployeeType.SUPERVISOR, EmployeeType.ADMIN)
