"""Employee router: registration, session, hierarchy and admin endpoints."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from swachh_api.config import SettingsDep
from swachh_api.dependencies import (
    AdminEmployee,
    CurrentEmployee,
    DBSession,
    EmployeeServiceDep,
    get_employee_service,
    run_in_transaction,
)
from swachh_api.routers.sessions import add_session_routes, auth_data
from swachh_api.schemas import (
    ApiResponse,
    AuthData,
    EmployeeProfileUpdate,
    EmployeeRegisterRequest,
    EmployeeStatsData,
    UserData,
    UserListData,
    UserResponse,
)
from swachh_api.session_cookies import set_auth_cookies
from swachh_identity import EmployeeType, SanitizedUser, UserRole

logger = logging.getLogger(__name__)

router = APIRouter()


def _user_list(users: list[SanitizedUser]) -> UserListData:
    return UserListData(
        users=[UserResponse.model_validate(user) for user in users],
        count=len(users),
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new employee",
    responses={
        201: {"description": "Employee registered successfully"},
        400: {"description": "Missing fields, invalid supervisor or weak password"},
        409: {"description": "Email or employee ID already registered"},
    },
)
async def register(
    body: EmployeeRegisterRequest,
    response: Response,
    service: EmployeeServiceDep,
    session: DBSession,
    settings: SettingsDep,
) -> ApiResponse[AuthData]:
    """
    Register a new employee account and start a session.

    A ``supervisorId``, when given, must reference a supervisor or admin.
    """
    result = await run_in_transaction(session, service.register(body.to_registration()))
    set_auth_cookies(response, result.tokens, settings)
    return ApiResponse(
        message="Employee registered successfully",
        data=auth_data(result),
    )


add_session_routes(router, get_employee_service, UserRole.EMPLOYEE)


@router.put("/profile", summary="Update employee profile")
async def update_profile(
    body: EmployeeProfileUpdate,
    current_user: CurrentEmployee,
    service: EmployeeServiceDep,
    session: DBSession,
) -> ApiResponse[UserData]:
    """Update name, phone, department, supervisor and assigned area."""
    user = await run_in_transaction(
        session,
        service.update_profile(current_user.user_id, body.to_changes()),
    )
    return ApiResponse(
        message="Profile updated successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.get("/by-department", summary="List employees of a department")
async def get_employees_by_department(
    _: CurrentEmployee,
    service: EmployeeServiceDep,
    department: str = Query(default=""),
    employee_type: Optional[EmployeeType] = Query(default=None, alias="employeeType"),
) -> ApiResponse[UserListData]:
    employees = await service.get_employees_by_department(department, employee_type)
    return ApiResponse(
        message="Employees retrieved successfully",
        data=_user_list(employees),
    )


@router.get("/by-area", summary="List employees assigned to an area")
async def get_employees_by_area(
    _: CurrentEmployee,
    service: EmployeeServiceDep,
    area: str = Query(default=""),
) -> ApiResponse[UserListData]:
    employees = await service.get_employees_by_area(area)
    return ApiResponse(
        message="Employees retrieved successfully",
        data=_user_list(employees),
    )


@router.get("/subordinates", summary="List own subordinates")
async def get_subordinates(
    current_user: CurrentEmployee,
    service: EmployeeServiceDep,
) -> ApiResponse[UserListData]:
    subordinates = await service.get_subordinates(current_user.user_id)
    return ApiResponse(
        message="Subordinates retrieved successfully",
        data=_user_list(subordinates),
    )


@router.get("/stats", summary="Employee statistics (admin only)")
async def get_employee_statistics(
    _: AdminEmployee,
    service: EmployeeServiceDep,
) -> ApiResponse[EmployeeStatsData]:
    counts = await service.get_employee_statistics()
    return ApiResponse(
        message="Employee statistics retrieved successfully",
        data=EmployeeStatsData.from_counts(counts),
    )


@router.post("/{user_id}/suspend", summary="Suspend an employee (admin only)")
async def suspend_employee(
    user_id: UUID,
    admin: AdminEmployee,
    service: EmployeeServiceDep,
    session: DBSession,
) -> ApiResponse:
    """Suspend the employee and end their session immediately."""
    await run_in_transaction(session, service.suspend_employee(user_id))
    logger.info("Admin %s suspended employee %s", admin.user_id, user_id)
    return ApiResponse(message="Employee suspended successfully")


@router.post("/{user_id}/reactivate", summary="Reactivate an employee (admin only)")
async def reactivate_employee(
    user_id: UUID,
    admin: AdminEmployee,
    service: EmployeeServiceDep,
    session: DBSession,
) -> ApiResponse:
    await run_in_transaction(session, service.reactivate_employee(user_id))
    logger.info("Admin %s reactivated employee %s", admin.user_id, user_id)
    return ApiResponse(message="Employee reactivated successfully")
