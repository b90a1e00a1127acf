"""Admin endpoints: approvals, user directory, analytics."""

from fastapi import APIRouter, Query

from stayhub.dependencies import DB, CurrentUser
from stayhub.models import Role
from stayhub.repositories.user import UserFilter
from stayhub.schemas.admin import AnalyticsResponse, PendingApprovalsResponse, UserListResponse
from stayhub.schemas.hotel import HotelResponse
from stayhub.schemas.user import UserResponse
from stayhub.services import admin
from stayhub.services.admin import ApprovalTarget

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/pending-approvals", response_model=PendingApprovalsResponse)
async def pending_approvals(db: DB, user: CurrentUser) -> PendingApprovalsResponse:
    return PendingApprovalsResponse.model_validate(await admin.get_pending_approvals(db, user))


@router.patch("/hotels/{hotel_id}/approve", response_model=HotelResponse)
async def approve_hotel(hotel_id: int, db: DB, user: CurrentUser) -> HotelResponse:
    hotel = await admin.approve(db, user, ApprovalTarget.HOTEL, hotel_id)
    return HotelResponse.model_validate(hotel)


@router.patch("/users/{user_id}/approve", response_model=UserResponse)
async def approve_user(user_id: int, db: DB, user: CurrentUser) -> UserResponse:
    approved = await admin.approve(db, user, ApprovalTarget.USER, user_id)
    return UserResponse.model_validate(approved)


@router.get("/users", response_model=UserListResponse)
async def list_users(
    db: DB,
    user: CurrentUser,
    role: Role | None = None,
    is_approved: bool | None = None,
    search: str | None = Query(None, max_length=100),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
) -> UserListResponse:
    filters = UserFilter(role=role, is_approved=is_approved, search=search)
    return UserListResponse.model_validate(await admin.get_users(db, user, filters, skip, limit))


@router.get("/analytics", response_model=AnalyticsResponse)
async def analytics(db: DB, user: CurrentUser) -> AnalyticsResponse:
    return AnalyticsResponse.model_validate(await admin.get_platform_analytics(db, user))
