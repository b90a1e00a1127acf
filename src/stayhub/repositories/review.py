"""Review data-access layer."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from stayhub.models import Review


async def get_review(db: AsyncSession, review_id: int) -> Review | None:
    """Return a review with its customer and hotel loaded."""
    stmt = (
        select(Review)
        .options(selectinload(Review.customer), selectinload(Review.hotel))
        .where(Review.id == review_id)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_review_by_booking(db: AsyncSession, booking_id: int) -> Review | None:
    result = await db.execute(select(Review).where(Review.booking_id == booking_id))
    return result.scalar_one_or_none()


async def list_published_reviews(
    db: AsyncSession, hotel_id: int, skip: int, limit: int
) -> list[Review]:
    stmt = (
        select(Review)
        .options(selectinload(Review.customer))
        .where(Review.hotel_id == hotel_id, Review.is_published.is_(True))
        .order_by(Review.created_at.desc(), Review.id.desc())
        .offset(skip)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_published_reviews(db: AsyncSession, hotel_id: int) -> int:
    stmt = select(func.count(Review.id)).where(
        Review.hotel_id == hotel_id, Review.is_published.is_(True)
    )
    result = await db.execute(stmt)
    return result.scalar_one()


async def get_overall_totals(db: AsyncSession, hotel_id: int) -> tuple[int, int]:
    """Return (review_count, sum_of_overall_ratings) across every review of a hotel."""
    stmt = select(func.count(Review.id), func.coalesce(func.sum(Review.overall), 0)).where(
        Review.hotel_id == hotel_id
    )
    count, total = (await db.execute(stmt)).one()
    return int(count), int(total)
