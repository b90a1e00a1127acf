"""Booking endpoints."""

from fastapi import APIRouter, Query

from stayhub.dependencies import DB, ApprovedUser
from stayhub.schemas.booking import (
    BookingCancel,
    BookingCreate,
    BookingListResponse,
    BookingResponse,
    BookingUpdate,
)
from stayhub.services import booking as bookings
from stayhub.services.booking import BookingPatch

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.get("/my-bookings", response_model=BookingListResponse)
async def my_bookings(
    db: DB,
    user: ApprovedUser,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
) -> BookingListResponse:
    return BookingListResponse.model_validate(
        await bookings.get_my_bookings(db, user, skip, limit)
    )


@router.get("", response_model=BookingListResponse)
async def list_bookings(
    db: DB,
    user: ApprovedUser,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
) -> BookingListResponse:
    """Customers get their own bookings, owners their hotels' bookings, admins all."""
    return BookingListResponse.model_validate(await bookings.get_bookings(db, user, skip, limit))


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(booking_id: int, db: DB, user: ApprovedUser) -> BookingResponse:
    return BookingResponse.model_validate(await bookings.get_booking_for(db, user, booking_id))


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(payload: BookingCreate, db: DB, user: ApprovedUser) -> BookingResponse:
    booking = await bookings.create_booking(
        db,
        user,
        room_id=payload.room_id,
        check_in=payload.check_in,
        check_out=payload.check_out,
        adults=payload.guests.adults,
        children=payload.guests.children,
        special_requests=payload.special_requests,
    )
    return BookingResponse.model_validate(booking)


@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: int, payload: BookingUpdate, db: DB, user: ApprovedUser
) -> BookingResponse:
    patch = BookingPatch(**payload.model_dump(exclude_unset=True))
    booking = await bookings.update_booking(db, user, booking_id, patch)
    return BookingResponse.model_validate(booking)


@router.put("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: int, db: DB, user: ApprovedUser, payload: BookingCancel | None = None
) -> BookingResponse:
    reason = payload.reason if payload else None
    booking = await bookings.cancel_booking(db, user, booking_id, reason=reason)
    return BookingResponse.model_validate(booking)
