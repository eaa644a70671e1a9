from enum import Enum


class UserStatus(str, Enum):
    """Account status. Only ACTIVE accounts may log in or refresh."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
