"""Request and response schemas of the HTTP API."""

from swachh_api.schemas.auth import (
    AuthData,
    ChangePasswordRequest,
    LoginRequest,
    RefreshRequest,
    TokenData,
)
from swachh_api.schemas.citizens import CitizenProfileUpdate, CitizenRegisterRequest
from swachh_api.schemas.common import (
    AddressSchema,
    ApiResponse,
    AssignedAreaSchema,
    CamelModel,
    CoordinatesSchema,
)
from swachh_api.schemas.employees import (
    EmployeeProfileUpdate,
    EmployeeRegisterRequest,
    EmployeeStatsData,
)
from swachh_api.schemas.users import (
    SupervisorResponse,
    UserData,
    UserListData,
    UserResponse,
)

__all__ = [
    "AddressSchema",
    "ApiResponse",
    "AssignedAreaSchema",
    "AuthData",
    "CamelModel",
    "ChangePasswordRequest",
    "CitizenProfileUpdate",
    "CitizenRegisterRequest",
    "CoordinatesSchema",
    "EmployeeProfileUpdate",
    "EmployeeRegisterRequest",
    "EmployeeStatsData",
    "LoginRequest",
    "RefreshRequest",
    "SupervisorResponse",
    "TokenData",
    "UserData",
    "UserListData",
    "UserResponse",
]
