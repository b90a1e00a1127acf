"""AI-assisted copywriting for hotel staff and guests.

Each operation builds a prompt from stored data and asks the configured
text generator. Provider failures surface as ProviderUnavailableError; the
chat relay is the only caller that degrades them to an empty result.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.exceptions import NotFoundError
from stayhub.logging import get_logger
from stayhub.models import User
from stayhub.repositories.booking import count_bookings, sum_booked_amount
from stayhub.repositories.chat import list_booking_messages
from stayhub.repositories.hotel import get_hotel
from stayhub.repositories.review import get_overall_totals, get_review
from stayhub.repositories.room import get_room
from stayhub.services.access import ensure_hotel_manager
from stayhub.services.booking import get_booking_for
from stayhub.services.review import round_rating
from stayhub.services.llm_client import TextGenerator

logger = get_logger(__name__)

MAX_SMART_REPLIES = 3


def smart_reply_prompt(message: str, context: str | None = None) -> str:
    return (
        f'Generate 3 short, helpful reply suggestions for this hotel guest message: "{message}".\n'
        f"Context: {context or 'general inquiry'}. "
        "Return only the replies, one per line, max 10 words each."
    )


def parse_replies(text: str) -> list[str]:
    """First three non-blank lines of the model's answer."""
    lines = (line.strip() for line in text.splitlines())
    return [line for line in lines if line][:MAX_SMART_REPLIES]


async def generate_smart_replies(
    generator: TextGenerator, message: str, context: str | None = None
) -> list[str]:
    text = await generator.generate(smart_reply_prompt(message, context), max_tokens=100)
    return parse_replies(text)


async def generate_room_description(
    generator: TextGenerator,
    *,
    room_type: str,
    amenities: Sequence[str],
    size: str | None = None,
    bed_type: str | None = None,
) -> str:
    details = [f"{bed_type} bed" if bed_type else None, size, f"amenities: {', '.join(amenities)}"]
    prompt = (
        f"Generate a compelling, SEO-optimized room description for a {room_type} hotel room.\n"
        f"Details: {', '.join(part for part in details if part)}.\n"
        "Make it professional, inviting, and highlight key features. Keep it under 150 words."
    )
    return await generator.generate(prompt, max_tokens=200)


async def generate_review_response(
    db: AsyncSession, generator: TextGenerator, *, review_id: int, tone: str = "professional"
) -> str:
    """Draft an owner response. Nothing is saved until the owner posts it."""
    review = await get_review(db, review_id)
    if review is None:
        raise NotFoundError("Review", review_id)
    prompt = (
        f"Generate a {tone} response to this hotel review.\n"
        f'Review: "{review.comment}" (Rating: {review.overall}/5)\n'
        "Make it warm, professional, and address any concerns. Keep it under 100 words."
    )
    return await generator.generate(prompt, max_tokens=150)


async def generate_pricing_suggestion(
    db: AsyncSession,
    generator: TextGenerator,
    *,
    room_id: int,
    season: str,
    current_price: Decimal,
) -> str:
    room = await get_room(db, room_id)
    if room is None:
        raise NotFoundError("Room", room_id)
    prompt = (
        f"Suggest an optimal pricing strategy for a {room.type} room in a "
        f"{room.hotel.category} hotel.\n"
        f"Current price: {current_price} {room.currency}/night, Season: {season}.\n"
        "Consider market trends, seasonality, and competitive positioning. "
        "Provide a price recommendation and brief reasoning."
    )
    return await generator.generate(prompt, max_tokens=150)


async def generate_marketing_content(
    db: AsyncSession,
    generator: TextGenerator,
    *,
    hotel_id: int,
    content_type: str,
    theme: str | None = None,
) -> str:
    hotel = await get_hotel(db, hotel_id)
    if hotel is None:
        raise NotFoundError("Hotel", hotel_id)
    prompt = (
        f'Generate {content_type} marketing content for a {hotel.category} hotel named "{hotel.name}" '
        f"in {hotel.city}.\n"
        f"Theme: {theme or 'general promotion'}. Make it engaging, persuasive, and highlight "
        "unique features. Keep it under 200 words."
    )
    return await generator.generate(prompt, max_tokens=250)


async def generate_booking_summary(
    db: AsyncSession, generator: TextGenerator, actor: User, *, booking_id: int
) -> str:
    """Summarize a stay and store the text on the booking."""
    booking = await get_booking_for(db, actor, booking_id)
    prompt = (
        f"Create a concise booking summary for a stay at {booking.hotel.name}:\n"
        f"Room: {booking.room.name}, Check-in: {booking.check_in.isoformat()}, "
        f"Check-out: {booking.check_out.isoformat()}, "
        f"Guests: {booking.guests_adults} adults, {booking.guests_children} children.\n"
        "Make it friendly and informative. Keep it under 100 words."
    )
    summary = await generator.generate(prompt, max_tokens=120)
    booking.ai_summary = summary
    await db.flush()
    logger.info("booking_summary_generated", booking_id=booking.id)
    return summary


@dataclass
class ChatSummary:
    booking_id: int
    message_count: int
    summary: str | None


async def generate_chat_summary(
    db: AsyncSession, generator: TextGenerator, actor: User, *, booking_id: int
) -> ChatSummary:
    """Summarize the conversation held about a booking. Nothing is stored."""
    booking = await get_booking_for(db, actor, booking_id)
    messages = await list_booking_messages(db, booking.id)
    if not messages:
        return ChatSummary(booking_id=booking.id, message_count=0, summary=None)

    transcript = "\n".join(f"{message.sender}: {message.message}" for message in messages)
    prompt = (
        f"Summarize this conversation between a guest and {booking.hotel.name} "
        f"about a stay from {booking.check_in.isoformat()} to {booking.check_out.isoformat()}:\n"
        f"{transcript}\n"
        "List the guest's requests and any open issues. Keep it under 100 words."
    )
    summary = await generator.generate(prompt, max_tokens=150)
    logger.info("chat_summary_generated", booking_id=booking.id, messages=len(messages))
    return ChatSummary(booking_id=booking.id, message_count=len(messages), summary=summary)


@dataclass
class HotelPerformance:
    total_bookings: int
    total_revenue: Decimal
    average_rating: float
    review_count: int


@dataclass
class BusinessInsights:
    insights: str
    stats: HotelPerformance


async def generate_business_insights(
    db: AsyncSession, generator: TextGenerator, actor: User, *, hotel_id: int
) -> BusinessInsights:
    hotel = await get_hotel(db, hotel_id)
    if hotel is None:
        raise NotFoundError("Hotel", hotel_id)
    ensure_hotel_manager(actor, hotel, "view insights for this hotel")

    review_count, rating_total = await get_overall_totals(db, hotel_id)
    stats = HotelPerformance(
        total_bookings=await count_bookings(db, hotel_ids=[hotel_id]),
        total_revenue=await sum_booked_amount(db, hotel_id),
        average_rating=round_rating(rating_total, review_count) if review_count else 0.0,
        review_count=review_count,
    )
    prompt = (
        "Analyze hotel performance and provide business insights:\n"
        f"Hotel: {hotel.name}, Total Bookings: {stats.total_bookings}, "
        f"Total Revenue: {stats.total_revenue}, "
        f"Average Rating: {stats.average_rating:.1f}/5, Reviews: {stats.review_count}.\n"
        "Provide 3-5 actionable insights and recommendations in bullet points."
    )
    insights = await generator.generate(prompt, max_tokens=300)
    return BusinessInsights(insights=insights, stats=stats)
