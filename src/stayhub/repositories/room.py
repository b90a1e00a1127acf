"""Room data-access layer."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from stayhub.models import Room


async def get_room(db: AsyncSession, room_id: int, *, for_update: bool = False) -> Room | None:
    """Return a room with its hotel loaded.

    ``for_update`` takes a row lock (SELECT ... FOR UPDATE) where the backend
    supports it, so inventory changes on the same room are serialized.
    """
    stmt = select(Room).options(selectinload(Room.hotel)).where(Room.id == room_id)
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def list_active_rooms(db: AsyncSession, skip: int, limit: int) -> list[Room]:
    stmt = (
        select(Room)
        .options(selectinload(Room.hotel))
        .where(Room.is_active.is_(True))
        .order_by(Room.created_at.desc(), Room.id.desc())
        .offset(skip)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_active_rooms(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Room.id)).where(Room.is_active.is_(True)))
    return result.scalar_one()


async def list_rooms_by_hotel(db: AsyncSession, hotel_id: int) -> list[Room]:
    stmt = (
        select(Room)
        .options(selectinload(Room.hotel))
        .where(Room.hotel_id == hotel_id, Room.is_active.is_(True))
        .order_by(Room.price_base, Room.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())
