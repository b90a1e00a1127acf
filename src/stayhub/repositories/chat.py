"""Chat message data-access layer."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models import ChatMessage


async def list_channel_messages(
    db: AsyncSession,
    hotel_id: int | None,
    *,
    user_id: int | None = None,
    limit: int = 50,
) -> list[ChatMessage]:
    """Return the latest messages of a channel in chronological order.

    ``hotel_id=None`` is the general support channel. ``user_id`` restricts
    the history to a single participant's messages.
    """
    if hotel_id is None:
        stmt = select(ChatMessage).where(ChatMessage.hotel_id.is_(None))
    else:
        stmt = select(ChatMessage).where(ChatMessage.hotel_id == hotel_id)
    if user_id is not None:
        stmt = stmt.where(ChatMessage.user_id == user_id)
    stmt = stmt.order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc()).limit(limit)
    result = await db.execute(stmt)
    return list(reversed(result.scalars().all()))


async def list_booking_messages(
    db: AsyncSession, booking_id: int, *, limit: int = 200
) -> list[ChatMessage]:
    """Return the latest messages about a booking in chronological order."""
    stmt = (
        select(ChatMessage)
        .where(ChatMessage.booking_id == booking_id)
        .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(reversed(result.scalars().all()))
