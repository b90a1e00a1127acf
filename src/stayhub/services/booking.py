"""Booking lifecycle: availability check, creation, status changes, cancellation.

Availability is decided by date overlap: a room type with ``quantity`` units
can hold at most ``quantity`` bookings in a holding status (pending,
confirmed, checked_in) on any shared date, check-out day included.
``rooms.available`` is a cached counter recomputed as
``max(0, quantity - holding bookings)`` under the room lock whenever a
booking starts or stops holding a unit, so it never drifts below zero however
many non-overlapping stays are booked.

Every inventory change goes through the room row: it is read with
SELECT ... FOR UPDATE and written with an optimistic version check, so two
concurrent requests cannot both take the last unit or both release the same
booking's unit.
"""

from dataclasses import dataclass
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from stayhub.config import settings
from stayhub.exceptions import (
    CapacityExceededError,
    ConflictError,
    InvalidDateRangeError,
    InvalidStatusTransitionError,
    NotAuthorizedError,
    NotFoundError,
    ValidationFailedError,
)
from stayhub.logging import get_logger
from stayhub.models import HOLDING_STATUSES, Booking, BookingStatus, Role, Room, User
from stayhub.repositories.booking import (
    count_bookings,
    count_holding_bookings,
    count_overlapping_bookings,
    get_booking,
    list_bookings,
)
from stayhub.repositories.hotel import list_hotel_ids_by_owner
from stayhub.repositories.room import get_room
from stayhub.schemas.pagination import Paginated
from stayhub.services.access import can_view_booking, ensure_hotel_manager

logger = get_logger(__name__)

# Forward-only lifecycle; cancelled is reachable from every non-terminal state.
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    BookingStatus.PENDING.value: frozenset({BookingStatus.CONFIRMED.value, BookingStatus.CANCELLED.value}),
    BookingStatus.CONFIRMED.value: frozenset({BookingStatus.CHECKED_IN.value, BookingStatus.CANCELLED.value}),
    BookingStatus.CHECKED_IN.value: frozenset({BookingStatus.CHECKED_OUT.value, BookingStatus.CANCELLED.value}),
    BookingStatus.CHECKED_OUT.value: frozenset(),
    BookingStatus.CANCELLED.value: frozenset(),
}


def _stale_booking() -> ConflictError:
    return ConflictError("Booking was modified concurrently, please retry")


@dataclass
class BookingPatch:
    """Fields hotel staff may change on a booking. None means unchanged."""

    status: str | None = None
    payment_status: str | None = None
    payment_method: str | None = None
    cancellation_reason: str | None = None


def has_capacity(room: Room, overlapping: int) -> bool:
    """Whether one more booking fits next to ``overlapping`` holding bookings."""
    if overlapping >= room.quantity:
        return False
    if settings.conservative_inventory and room.available <= 0:
        return False
    return True


def _validate_guests(room: Room, adults: int, children: int) -> None:
    errors = []
    if adults > room.capacity_adults:
        errors.append(f"Room allows at most {room.capacity_adults} adults")
    if children > room.capacity_children:
        errors.append(f"Room allows at most {room.capacity_children} children")
    if errors:
        raise ValidationFailedError("Guest count exceeds room capacity", errors)


async def flush_inventory(db: AsyncSession, error: Exception) -> None:
    """Flush pending inventory writes; a concurrent writer on the same row raises ``error``."""
    try:
        await db.flush()
    except StaleDataError as exc:
        logger.warning("inventory_write_conflict", error=str(exc))
        raise error from exc


async def sync_available(db: AsyncSession, room: Room, error: Exception) -> None:
    """Recompute the room's cached ``available`` from the bookings holding a unit.

    The room row is rewritten even when the value is unchanged so its version
    moves; a concurrent writer holding the previous version fails with ``error``.
    """
    await flush_inventory(db, error)
    holding = await count_holding_bookings(db, room.id)
    room.available = max(0, room.quantity - holding)
    flag_modified(room, "available")
    await flush_inventory(db, error)


async def create_booking(
    db: AsyncSession,
    customer: User,
    *,
    room_id: int,
    check_in: date,
    check_out: date,
    adults: int,
    children: int = 0,
    special_requests: str | None = None,
) -> Booking:
    """Reserve one unit of a room type from check_in to check_out.

    Raises:
        InvalidDateRangeError: check_out is not after check_in.
        NotFoundError: the room does not exist or is inactive.
        ValidationFailedError: guests exceed the room's capacity.
        CapacityExceededError: every unit is already held on one of the requested dates.
    """
    if check_in >= check_out:
        raise InvalidDateRangeError()

    room = await get_room(db, room_id, for_update=True)
    if room is None or not room.is_active:
        raise NotFoundError("Room", room_id)
    _validate_guests(room, adults, children)

    overlapping = await count_overlapping_bookings(db, room.id, check_in, check_out)
    if not has_capacity(room, overlapping):
        logger.info(
            "booking_capacity_exceeded",
            room_id=room.id,
            overlapping=overlapping,
            quantity=room.quantity,
            available=room.available,
        )
        raise CapacityExceededError()

    nights = (check_out - check_in).days
    booking = Booking(
        customer_id=customer.id,
        hotel_id=room.hotel_id,
        room_id=room.id,
        check_in=check_in,
        check_out=check_out,
        guests_adults=adults,
        guests_children=children,
        total_amount=room.price_base * nights,
        currency=room.currency,
        status=BookingStatus.PENDING.value,
        special_requests=special_requests,
    )
    db.add(booking)
    await sync_available(db, room, CapacityExceededError())
    await db.refresh(booking, attribute_names=["customer", "hotel", "room"])

    logger.info(
        "booking_created",
        booking_id=booking.id,
        room_id=room.id,
        nights=nights,
        total_amount=str(booking.total_amount),
    )
    return booking


async def _release_unit(db: AsyncSession, booking: Booking) -> None:
    # Write the booking first so a stale copy fails here rather than in autoflush
    await flush_inventory(db, _stale_booking())
    room = await get_room(db, booking.room_id, for_update=True)
    if room is not None:
        await sync_available(db, room, _stale_booking())


async def _apply_cancellation(db: AsyncSession, booking: Booking, reason: str | None) -> Booking:
    if booking.status == BookingStatus.CANCELLED:
        logger.info("booking_already_cancelled", booking_id=booking.id)
        return booking
    if BookingStatus.CANCELLED not in ALLOWED_TRANSITIONS[booking.status]:
        raise InvalidStatusTransitionError(booking.status, BookingStatus.CANCELLED)

    booking.status = BookingStatus.CANCELLED.value
    booking.cancellation_reason = reason
    await _release_unit(db, booking)
    await flush_inventory(db, _stale_booking())
    logger.info("booking_cancelled", booking_id=booking.id, room_id=booking.room_id)
    return booking


async def _get_locked_booking(db: AsyncSession, booking_id: int) -> Booking:
    booking = await get_booking(db, booking_id, for_update=True)
    if booking is None:
        raise NotFoundError("Booking", booking_id)
    return booking


async def cancel_booking(
    db: AsyncSession, actor: User, booking_id: int, *, reason: str | None = None
) -> Booking:
    """Cancel a booking and give its unit back to the room.

    Allowed for the booking's customer, the hotel's owner and admins.
    Cancelling an already-cancelled booking returns it unchanged.
    """
    booking = await _get_locked_booking(db, booking_id)
    if not can_view_booking(actor, booking):
        raise NotAuthorizedError("Not authorized to cancel this booking")
    return await _apply_cancellation(db, booking, reason)


async def update_booking(
    db: AsyncSession, actor: User, booking_id: int, patch: BookingPatch
) -> Booking:
    """Change status or payment fields. Hotel owner or admin only.

    Availability is not re-checked: status changes only move a booking along
    its lifecycle. Moving to cancelled behaves exactly like cancel_booking.
    """
    booking = await _get_locked_booking(db, booking_id)
    ensure_hotel_manager(actor, booking.hotel, "update this booking")

    if patch.payment_status is not None:
        booking.payment_status = patch.payment_status
    if patch.payment_method is not None:
        booking.payment_method = patch.payment_method

    target = patch.status
    if target is None or target == booking.status:
        await db.flush()
        return booking

    if target == BookingStatus.CANCELLED:
        return await _apply_cancellation(db, booking, patch.cancellation_reason)
    if target not in ALLOWED_TRANSITIONS[booking.status]:
        raise InvalidStatusTransitionError(booking.status, target)

    was_holding = booking.is_holding
    previous = booking.status
    booking.status = target
    if was_holding and target not in HOLDING_STATUSES:
        await _release_unit(db, booking)
    await flush_inventory(db, _stale_booking())
    logger.info("booking_status_changed", booking_id=booking.id, old=previous, new=target)
    return booking


async def get_booking_for(db: AsyncSession, actor: User, booking_id: int) -> Booking:
    booking = await get_booking(db, booking_id)
    if booking is None:
        raise NotFoundError("Booking", booking_id)
    if not can_view_booking(actor, booking):
        raise NotAuthorizedError("Not authorized to view this booking")
    return booking


async def get_bookings(db: AsyncSession, actor: User, skip: int, limit: int) -> Paginated[Booking]:
    """Role-scoped list: customers see their own, owners their hotels', admins all."""
    customer_id: int | None = None
    hotel_ids: list[int] | None = None
    if actor.role == Role.HOTEL_OWNER:
        hotel_ids = await list_hotel_ids_by_owner(db, actor.id)
    elif actor.role != Role.ADMIN:
        customer_id = actor.id

    items = await list_bookings(db, skip, limit, customer_id=customer_id, hotel_ids=hotel_ids)
    total = await count_bookings(db, customer_id=customer_id, hotel_ids=hotel_ids)
    return Paginated(items=items, total=total, skip=skip, limit=limit)


async def get_my_bookings(
    db: AsyncSession, customer: User, skip: int, limit: int
) -> Paginated[Booking]:
    items = await list_bookings(db, skip, limit, customer_id=customer.id)
    total = await count_bookings(db, customer_id=customer.id)
    return Paginated(items=items, total=total, skip=skip, limit=limit)
