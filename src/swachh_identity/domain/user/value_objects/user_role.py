from enum import Enum


class UserRole(str, Enum):
    """Who the account belongs to: a resident or a municipal worker."""

    CITIZEN = "citizen"
    EMPLOYEE = "employee"
