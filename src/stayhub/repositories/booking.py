"""Booking data-access layer.

Pure query functions. The overlap query here is the source of truth for
room availability; rooms.available is only a cached counter.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from stayhub.models import HOLDING_STATUSES, Booking, PaymentStatus


def _with_relations(stmt: Select[tuple[Booking]]) -> Select[tuple[Booking]]:
    return stmt.options(
        selectinload(Booking.customer),
        selectinload(Booking.hotel),
        selectinload(Booking.room),
    )


def _scope(
    *, customer_id: int | None = None, hotel_ids: Sequence[int] | None = None
) -> list[ColumnElement[bool]]:
    clauses: list[ColumnElement[bool]] = []
    if customer_id is not None:
        clauses.append(Booking.customer_id == customer_id)
    if hotel_ids is not None:
        clauses.append(Booking.hotel_id.in_(hotel_ids))
    return clauses


async def get_booking(
    db: AsyncSession, booking_id: int, *, for_update: bool = False
) -> Booking | None:
    """Return a booking with customer, hotel and room loaded.

    ``for_update`` locks the booking row for the rest of the transaction.
    """
    stmt = _with_relations(select(Booking).where(Booking.id == booking_id))
    if for_update:
        stmt = stmt.with_for_update(of=Booking)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def count_overlapping_bookings(
    db: AsyncSession,
    room_id: int,
    check_in: date,
    check_out: date,
    statuses: Sequence[str] = HOLDING_STATUSES,
) -> int:
    """Count bookings of ``room_id`` whose dates touch the given stay.

    Bounds are inclusive: a booking checking out on the day the new stay
    checks in still conflicts with it.
    """
    stmt = select(func.count(Booking.id)).where(
        Booking.room_id == room_id,
        Booking.status.in_(statuses),
        Booking.check_in <= check_out,
        Booking.check_out >= check_in,
    )
    result = await db.execute(stmt)
    return result.scalar_one()


async def count_holding_bookings(db: AsyncSession, room_id: int) -> int:
    """Count bookings of ``room_id`` that still hold a unit, regardless of dates."""
    stmt = select(func.count(Booking.id)).where(
        Booking.room_id == room_id, Booking.status.in_(HOLDING_STATUSES)
    )
    result = await db.execute(stmt)
    return result.scalar_one()


async def list_bookings(
    db: AsyncSession,
    skip: int,
    limit: int,
    *,
    customer_id: int | None = None,
    hotel_ids: Sequence[int] | None = None,
) -> list[Booking]:
    """Return a page of bookings, newest first, optionally scoped to a customer or hotels."""
    stmt = _with_relations(
        select(Booking)
        .where(*_scope(customer_id=customer_id, hotel_ids=hotel_ids))
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .offset(skip)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_bookings(
    db: AsyncSession,
    *,
    customer_id: int | None = None,
    hotel_ids: Sequence[int] | None = None,
    status: str | None = None,
) -> int:
    stmt = select(func.count(Booking.id)).where(
        *_scope(customer_id=customer_id, hotel_ids=hotel_ids)
    )
    if status is not None:
        stmt = stmt.where(Booking.status == status)
    result = await db.execute(stmt)
    return result.scalar_one()


async def sum_paid_revenue(db: AsyncSession, *, hotel_id: int | None = None) -> Decimal:
    """Total amount of bookings whose payment went through."""
    stmt = select(func.coalesce(func.sum(Booking.total_amount), 0)).where(
        Booking.payment_status == PaymentStatus.PAID.value
    )
    if hotel_id is not None:
        stmt = stmt.where(Booking.hotel_id == hotel_id)
    result = await db.execute(stmt)
    return Decimal(str(result.scalar_one()))


async def sum_booked_amount(db: AsyncSession, hotel_id: int) -> Decimal:
    """Total amount of every booking of a hotel, whatever its payment state."""
    stmt = select(func.coalesce(func.sum(Booking.total_amount), 0)).where(
        Booking.hotel_id == hotel_id
    )
    result = await db.execute(stmt)
    return Decimal(str(result.scalar_one()))
