from swachh_identity.domain.user.repositories.user_repository import (
    EmployeeCounts,
    EmployeeTypeCount,
    UserRepository,
)

__all__ = ["EmployeeCounts", "EmployeeTypeCount", "UserRepository"]
