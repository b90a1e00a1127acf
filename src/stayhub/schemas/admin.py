"""Admin schemas."""

from decimal import Decimal

from pydantic import BaseModel

from stayhub.schemas.hotel import HotelResponse
from stayhub.schemas.pagination import PaginatedResponse
from stayhub.schemas.user import UserResponse


class PendingApprovalsResponse(BaseModel):
    model_config = {"from_attributes": True}

    hotels: list[HotelResponse]
    owners: list[UserResponse]


class HotelStats(BaseModel):
    model_config = {"from_attributes": True}

    total: int
    approved: int
    pending: int


class UserStats(BaseModel):
    model_config = {"from_attributes": True}

    total: int
    customers: int
    owners: int
    admins: int


class BookingStats(BaseModel):
    model_config = {"from_attributes": True}

    total: int
    confirmed: int
    completed: int


class AnalyticsResponse(BaseModel):
    """Platform-wide counters. Revenue counts paid bookings only."""

    model_config = {"from_attributes": True}

    hotels: HotelStats
    users: UserStats
    bookings: BookingStats
    revenue: Decimal


class UserListResponse(PaginatedResponse[UserResponse]):
    """Paginated, filtered user directory."""
