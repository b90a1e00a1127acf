"""Review business logic and the hotel rating aggregate.

A hotel's ``rating_average``/``rating_count`` are recomputed from every review
of the hotel whenever one is created or edited, with the hotel row locked so
concurrent reviews cannot interleave their recomputations.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.exceptions import (
    DuplicateReviewError,
    NotAuthorizedError,
    NotFoundError,
    ValidationFailedError,
)
from stayhub.logging import get_logger
from stayhub.models import BookingStatus, Review, User
from stayhub.repositories.booking import get_booking
from stayhub.repositories.hotel import get_hotel
from stayhub.repositories.review import (
    count_published_reviews,
    get_overall_totals,
    get_review,
    get_review_by_booking,
    list_published_reviews,
)
from stayhub.schemas.pagination import Paginated
from stayhub.services.access import ensure_hotel_manager

logger = get_logger(__name__)

RATING_FIELDS = ("overall", "cleanliness", "service", "value", "location")


def round_rating(total: int, count: int) -> float:
    """Mean rounded half-up to one decimal (4.25 -> 4.3, not banker's 4.2)."""
    mean = Decimal(total) / Decimal(count)
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


async def recompute_hotel_rating(db: AsyncSession, hotel_id: int) -> None:
    """Refresh the hotel's stored average and count. No reviews leaves them untouched."""
    hotel = await get_hotel(db, hotel_id, for_update=True)
    if hotel is None:
        return
    count, total = await get_overall_totals(db, hotel_id)
    if count == 0:
        return
    hotel.rating_average = round_rating(total, count)
    hotel.rating_count = count
    await db.flush()
    logger.info(
        "hotel_rating_recomputed",
        hotel_id=hotel_id,
        average=hotel.rating_average,
        count=count,
    )


def _apply_rating(review: Review, rating: Mapping[str, int | None]) -> None:
    for field in RATING_FIELDS:
        if field in rating:
            setattr(review, field, rating[field])


async def create_review(
    db: AsyncSession,
    customer: User,
    *,
    booking_id: int,
    rating: Mapping[str, int | None],
    comment: str,
) -> Review:
    """Review a stay. One review per booking, by the booking's customer only.

    The hotel is always the booking's hotel, whatever the client claims.
    """
    booking = await get_booking(db, booking_id)
    if booking is None or booking.customer_id != customer.id:
        raise NotAuthorizedError("Not authorized to review this booking")
    if booking.status == BookingStatus.CANCELLED:
        raise ValidationFailedError("Cancelled bookings cannot be reviewed")
    if await get_review_by_booking(db, booking.id) is not None:
        raise DuplicateReviewError()

    review = Review(
        customer_id=customer.id,
        hotel_id=booking.hotel_id,
        booking_id=booking.id,
        comment=comment,
        is_verified=True,
    )
    _apply_rating(review, rating)
    db.add(review)
    try:
        await db.flush()
    except IntegrityError as exc:
        raise DuplicateReviewError() from exc

    await recompute_hotel_rating(db, review.hotel_id)
    await db.refresh(review, attribute_names=["customer"])
    logger.info("review_created", review_id=review.id, hotel_id=review.hotel_id)
    return review


async def _require_review(db: AsyncSession, review_id: int) -> Review:
    review = await get_review(db, review_id)
    if review is None:
        raise NotFoundError("Review", review_id)
    return review


async def update_review(
    db: AsyncSession,
    customer: User,
    review_id: int,
    *,
    rating: Mapping[str, int | None] | None = None,
    comment: str | None = None,
) -> Review:
    review = await _require_review(db, review_id)
    if review.customer_id != customer.id:
        raise NotAuthorizedError("Not authorized to update this review")

    if rating:
        _apply_rating(review, rating)
    if comment is not None:
        review.comment = comment
    await db.flush()
    await recompute_hotel_rating(db, review.hotel_id)
    return review


async def respond_to_review(
    db: AsyncSession,
    actor: User,
    review_id: int,
    *,
    text: str,
    tone: str | None = None,
    generated_by_ai: bool = False,
) -> Review:
    """Attach (or replace) the hotel's public response to a review."""
    review = await _require_review(db, review_id)
    ensure_hotel_manager(actor, review.hotel, "respond to this review")

    review.response_text = text
    review.response_tone = tone
    review.response_generated_by_ai = generated_by_ai
    review.responded_at = datetime.now(UTC)
    await db.flush()
    logger.info("review_responded", review_id=review.id, generated_by_ai=generated_by_ai)
    return review


async def get_review_by_id(db: AsyncSession, review_id: int) -> Review:
    return await _require_review(db, review_id)


async def get_hotel_reviews(
    db: AsyncSession, hotel_id: int, skip: int, limit: int
) -> Paginated[Review]:
    items = await list_published_reviews(db, hotel_id, skip, limit)
    total = await count_published_reviews(db, hotel_id)
    return Paginated(items=items, total=total, skip=skip, limit=limit)
