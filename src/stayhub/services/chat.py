"""Real-time chat relay.

Messages are persisted first, then fanned out to every subscriber of the
message's channel (``hotel-{id}``, or ``general`` for support chat without a
hotel). Guest messages carry up to three AI reply suggestions; producing them
is best-effort and bounded by ``settings.ai_suggestion_timeout``.
"""

import asyncio
from collections import defaultdict
from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.config import settings
from stayhub.exceptions import NotAuthorizedError, NotFoundError, UpstreamUnavailableError
from stayhub.logging import get_logger
from stayhub.models import ChatMessage, ChatSender, User
from stayhub.repositories.booking import get_booking
from stayhub.repositories.chat import list_channel_messages
from stayhub.repositories.hotel import get_hotel
from stayhub.schemas.chat import ChatMessageResponse
from stayhub.services.access import can_view_booking, is_admin, manages_hotel
from stayhub.services.ai import generate_smart_replies
from stayhub.services.llm_client import TextGenerator

logger = get_logger(__name__)

GENERAL_CHANNEL = "general"
NEW_MESSAGE_EVENT = "new-message"


def channel_for(hotel_id: int | None) -> str:
    return f"hotel-{hotel_id}" if hotel_id is not None else GENERAL_CHANNEL


class Subscriber(Protocol):
    async def send_json(self, data: Any) -> None: ...


class ChatHub:
    """In-process channel registry. One instance per application process."""

    def __init__(self) -> None:
        self._channels: dict[str, set[Subscriber]] = defaultdict(set)

    def join(self, channel: str, subscriber: Subscriber) -> None:
        self._channels[channel].add(subscriber)
        logger.debug("chat_joined", channel=channel, subscribers=len(self._channels[channel]))

    def leave(self, subscriber: Subscriber) -> None:
        """Remove a subscriber from every channel it joined."""
        for channel in list(self._channels):
            self._channels[channel].discard(subscriber)
            if not self._channels[channel]:
                del self._channels[channel]

    def subscribers(self, channel: str) -> set[Subscriber]:
        return set(self._channels.get(channel, ()))

    async def broadcast(self, channel: str, event: dict[str, Any]) -> int:
        """Send ``event`` to the channel. Subscribers that fail to receive are dropped."""
        delivered = 0
        for subscriber in self.subscribers(channel):
            try:
                await subscriber.send_json(event)
            except Exception as exc:
                logger.warning("chat_subscriber_dropped", channel=channel, error=str(exc))
                self.leave(subscriber)
            else:
                delivered += 1
        return delivered


hub = ChatHub()


async def suggest_replies(generator: TextGenerator, message: str) -> list[str]:
    """Reply suggestions for a guest message, or [] when the provider fails or is slow."""
    try:
        return await asyncio.wait_for(
            generate_smart_replies(generator, message), settings.ai_suggestion_timeout
        )
    except (UpstreamUnavailableError, TimeoutError) as exc:
        logger.warning("smart_replies_unavailable", error=str(exc) or type(exc).__name__)
        return []


async def record_message(
    db: AsyncSession,
    user: User,
    *,
    message: str,
    hotel_id: int | None = None,
    booking_id: int | None = None,
    sender: str = ChatSender.USER.value,
) -> ChatMessage:
    """Persist a chat message.

    Only the hotel's staff (or an admin) may speak as ``support``.
    """
    hotel = None
    if hotel_id is not None:
        hotel = await get_hotel(db, hotel_id)
        if hotel is None:
            raise NotFoundError("Hotel", hotel_id)
    if booking_id is not None:
        booking = await get_booking(db, booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        if not can_view_booking(user, booking):
            raise NotAuthorizedError("Not authorized to chat about this booking")
    if sender == ChatSender.SUPPORT and not (
        is_admin(user) or (hotel is not None and manages_hotel(user, hotel))
    ):
        raise NotAuthorizedError("Only hotel staff can reply as support")

    chat_message = ChatMessage(
        user_id=user.id,
        hotel_id=hotel_id,
        booking_id=booking_id,
        message=message,
        sender=sender,
        is_ai=sender == ChatSender.AI,
    )
    db.add(chat_message)
    await db.flush()
    return chat_message


async def deliver(
    chat_hub: ChatHub, generator: TextGenerator, chat_message: ChatMessage
) -> dict[str, Any]:
    """Fan a persisted message out to its channel and return the event sent."""
    smart_replies: list[str] = []
    if chat_message.sender == ChatSender.USER:
        smart_replies = await suggest_replies(generator, chat_message.message)

    payload = ChatMessageResponse.model_validate(chat_message).model_dump(mode="json")
    event = {"event": NEW_MESSAGE_EVENT, "data": {**payload, "smart_replies": smart_replies}}
    channel = channel_for(chat_message.hotel_id)
    delivered = await chat_hub.broadcast(channel, event)
    logger.info(
        "chat_message_delivered",
        message_id=chat_message.id,
        channel=channel,
        subscribers=delivered,
        smart_replies=len(smart_replies),
    )
    return event


async def get_history(
    db: AsyncSession, user: User, hotel_id: int | None, *, limit: int = 50
) -> list[ChatMessage]:
    """Channel history. Hotel staff see the whole hotel channel, everyone else their own messages."""
    if hotel_id is not None:
        hotel = await get_hotel(db, hotel_id)
        if hotel is None:
            raise NotFoundError("Hotel", hotel_id)
        if manages_hotel(user, hotel):
            return await list_channel_messages(db, hotel_id, limit=limit)
    elif is_admin(user):
        return await list_channel_messages(db, None, limit=limit)
    return await list_channel_messages(db, hotel_id, user_id=user.id, limit=limit)
