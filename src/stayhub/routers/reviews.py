"""Review endpoints."""

from fastapi import APIRouter, Query

from stayhub.dependencies import DB, ApprovedUser
from stayhub.schemas.review import (
    ReviewCreate,
    ReviewListResponse,
    ReviewRespond,
    ReviewResponse,
    ReviewUpdate,
)
from stayhub.services import review as reviews

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.get("/hotel/{hotel_id}", response_model=ReviewListResponse)
async def list_hotel_reviews(
    hotel_id: int,
    db: DB,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
) -> ReviewListResponse:
    result = await reviews.get_hotel_reviews(db, hotel_id, skip, limit)
    return ReviewListResponse.model_validate(result)


@router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: int, db: DB) -> ReviewResponse:
    return ReviewResponse.model_validate(await reviews.get_review_by_id(db, review_id))


@router.post("", response_model=ReviewResponse, status_code=201)
async def create_review(payload: ReviewCreate, db: DB, user: ApprovedUser) -> ReviewResponse:
    review = await reviews.create_review(
        db,
        user,
        booking_id=payload.booking_id,
        rating=payload.rating.model_dump(),
        comment=payload.comment,
    )
    return ReviewResponse.model_validate(review)


@router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: int, payload: ReviewUpdate, db: DB, user: ApprovedUser
) -> ReviewResponse:
    review = await reviews.update_review(
        db,
        user,
        review_id,
        rating=payload.rating.model_dump(exclude_unset=True) if payload.rating else None,
        comment=payload.comment,
    )
    return ReviewResponse.model_validate(review)


@router.post("/{review_id}/respond", response_model=ReviewResponse)
async def respond_to_review(
    review_id: int, payload: ReviewRespond, db: DB, user: ApprovedUser
) -> ReviewResponse:
    review = await reviews.respond_to_review(
        db,
        user,
        review_id,
        text=payload.text,
        tone=payload.tone,
        generated_by_ai=payload.generated_by_ai,
    )
    return ReviewResponse.model_validate(review)
