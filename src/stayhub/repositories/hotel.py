"""Hotel data-access layer."""

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from stayhub.models import Hotel


def _public() -> tuple[ColumnElement[bool], ...]:
    return (Hotel.is_approved.is_(True), Hotel.is_active.is_(True))


async def get_hotel(db: AsyncSession, hotel_id: int, *, for_update: bool = False) -> Hotel | None:
    """Return a hotel with its owner eagerly loaded.

    ``for_update`` locks the hotel row, serializing rating recomputation.
    """
    stmt = select(Hotel).options(selectinload(Hotel.owner)).where(Hotel.id == hotel_id)
    if for_update:
        stmt = stmt.with_for_update(of=Hotel)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def list_public_hotels(db: AsyncSession, skip: int, limit: int) -> list[Hotel]:
    """Return a page of approved, active hotels, newest first."""
    stmt = (
        select(Hotel)
        .options(selectinload(Hotel.owner))
        .where(*_public())
        .order_by(Hotel.created_at.desc(), Hotel.id.desc())
        .offset(skip)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_public_hotels(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Hotel.id)).where(*_public()))
    return result.scalar_one()


async def search_public_hotels(
    db: AsyncSession, *, category: str | None, city: str | None
) -> list[Hotel]:
    """Filter approved, active hotels by category and case-insensitive city substring."""
    stmt = select(Hotel).options(selectinload(Hotel.owner)).where(*_public())
    if category:
        stmt = stmt.where(Hotel.category == category)
    if city:
        stmt = stmt.where(func.lower(Hotel.city).contains(city.lower(), autoescape=True))
    stmt = stmt.order_by(Hotel.created_at.desc(), Hotel.id.desc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_hotels_by_owner(db: AsyncSession, owner_id: int) -> list[Hotel]:
    stmt = (
        select(Hotel)
        .options(selectinload(Hotel.owner))
        .where(Hotel.owner_id == owner_id)
        .order_by(Hotel.created_at.desc(), Hotel.id.desc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_hotel_ids_by_owner(db: AsyncSession, owner_id: int) -> list[int]:
    result = await db.execute(select(Hotel.id).where(Hotel.owner_id == owner_id))
    return list(result.scalars().all())


async def list_pending_hotels(db: AsyncSession) -> list[Hotel]:
    stmt = (
        select(Hotel)
        .options(selectinload(Hotel.owner))
        .where(Hotel.is_approved.is_(False))
        .order_by(Hotel.created_at, Hotel.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_hotels(db: AsyncSession, *, approved: bool | None = None) -> int:
    stmt = select(func.count(Hotel.id))
    if approved is not None:
        stmt = stmt.where(Hotel.is_approved.is_(approved))
    result = await db.execute(stmt)
    return result.scalar_one()
