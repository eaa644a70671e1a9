"""Citizen router: registration, session, profile and account endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Query, Response, status

from swachh_api.config import SettingsDep
from swachh_api.dependencies import (
    CitizenServiceDep,
    CurrentCitizen,
    CurrentEmployee,
    DBSession,
    get_citizen_service,
    run_in_transaction,
)
from swachh_api.routers.sessions import add_session_routes, auth_data
from swachh_api.schemas import (
    ApiResponse,
    AuthData,
    CitizenProfileUpdate,
    CitizenRegisterRequest,
    UserData,
    UserListData,
    UserResponse,
)
from swachh_api.session_cookies import clear_auth_cookies, set_auth_cookies
from swachh_identity import UserRole

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new citizen",
    responses={
        201: {"description": "Citizen registered successfully"},
        400: {"description": "Missing fields, invalid data or weak password"},
        409: {"description": "Email already registered"},
    },
)
async def register(
    body: CitizenRegisterRequest,
    response: Response,
    service: CitizenServiceDep,
    session: DBSession,
    settings: SettingsDep,
) -> ApiResponse[AuthData]:
    """
    Register a new citizen account and start a session.

    Password requirements: at least 8 characters with upper and lower
    case letters, a digit and a special character.
    """
    result = await run_in_transaction(session, service.register(body.to_registration()))
    set_auth_cookies(response, result.tokens, settings)
    return ApiResponse(
        message="Citizen registered successfully",
        data=auth_data(result),
    )


add_session_routes(router, get_citizen_service, UserRole.CITIZEN)


@router.put("/profile", summary="Update citizen profile")
async def update_profile(
    body: CitizenProfileUpdate,
    current_user: CurrentCitizen,
    service: CitizenServiceDep,
    session: DBSession,
) -> ApiResponse[UserData]:
    """Update name, phone number and address. Other fields are ignored."""
    user = await run_in_transaction(
        session,
        service.update_profile(current_user.user_id, body.to_changes()),
    )
    return ApiResponse(
        message="Profile updated successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.delete("/account", summary="Deactivate own account")
async def deactivate_account(
    response: Response,
    current_user: CurrentCitizen,
    service: CitizenServiceDep,
    session: DBSession,
    settings: SettingsDep,
) -> ApiResponse:
    """Deactivate the account. It cannot log in again afterwards."""
    await run_in_transaction(session, service.deactivate_account(current_user.user_id))
    clear_auth_cookies(response, settings)
    return ApiResponse(message="Account deactivated successfully")


@router.get("/by-location", summary="List citizens by location (employees only)")
async def get_citizens_by_location(
    _: CurrentEmployee,
    service: CitizenServiceDep,
    city: str = Query(default="", description="City (substring, case-insensitive)"),
    state: Optional[str] = Query(default=None, description="Optional state filter"),
) -> ApiResponse[UserListData]:
    citizens = await service.get_citizens_by_location(city, state)
    return ApiResponse(
        message="Citizens retrieved successfully",
        data=UserListData(
            users=[UserResponse.model_validate(c) for c in citizens],
            count=len(citizens),
        ),
    )
