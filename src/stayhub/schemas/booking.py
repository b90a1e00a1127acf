"""Booking request and response schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from stayhub.models import BookingStatus, PaymentMethod, PaymentStatus
from stayhub.schemas.hotel import HotelSummary
from stayhub.schemas.pagination import PaginatedResponse
from stayhub.schemas.room import RoomSummary
from stayhub.schemas.user import UserSummary


class Guests(BaseModel):
    adults: int = Field(..., ge=1)
    children: int = Field(0, ge=0)


class BookingCreate(BaseModel):
    room_id: int
    check_in: date
    check_out: date
    guests: Guests
    special_requests: str | None = Field(None, max_length=1000)


class BookingUpdate(BaseModel):
    """Staff-side changes. Status moves forward only; cancelled goes through cancellation."""

    status: BookingStatus | None = None
    payment_status: PaymentStatus | None = None
    payment_method: PaymentMethod | None = None
    cancellation_reason: str | None = Field(None, max_length=500)


class BookingCancel(BaseModel):
    reason: str | None = Field(None, max_length=500)


class BookingResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    customer: UserSummary
    hotel: HotelSummary
    room: RoomSummary
    check_in: date
    check_out: date
    nights: int
    guests: Guests
    total_amount: Decimal
    currency: str
    status: str
    payment_status: str
    payment_method: str | None
    special_requests: str | None
    cancellation_reason: str | None
    ai_summary: str | None
    created_at: datetime
    updated_at: datetime


class BookingListResponse(PaginatedResponse[BookingResponse]):
    """Paginated, role-scoped list of bookings."""
