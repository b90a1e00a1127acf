"""Review request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from stayhub.models import ResponseTone
from stayhub.schemas.pagination import PaginatedResponse
from stayhub.schemas.user import ReviewerSummary


class RatingBreakdown(BaseModel):
    overall: int = Field(..., ge=1, le=5)
    cleanliness: int | None = Field(None, ge=1, le=5)
    service: int | None = Field(None, ge=1, le=5)
    value: int | None = Field(None, ge=1, le=5)
    location: int | None = Field(None, ge=1, le=5)


class ReviewCreate(BaseModel):
    # The hotel is derived from the booking
    booking_id: int
    rating: RatingBreakdown
    comment: str = Field(..., min_length=1, max_length=2000)


class ReviewUpdate(BaseModel):
    rating: RatingBreakdown | None = None
    comment: str | None = Field(None, min_length=1, max_length=2000)


class ReviewRespond(BaseModel):
    text: str = Field(..., min_length=1, max_length=2000)
    tone: ResponseTone | None = None
    generated_by_ai: bool = False


class OwnerResponse(BaseModel):
    text: str
    tone: str | None
    generated_by_ai: bool
    responded_at: datetime | None


class ReviewResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    customer: ReviewerSummary
    hotel_id: int
    booking_id: int
    rating: RatingBreakdown
    comment: str
    owner_response: OwnerResponse | None
    sentiment: str | None
    is_verified: bool
    is_published: bool
    created_at: datetime
    updated_at: datetime


class ReviewListResponse(PaginatedResponse[ReviewResponse]):
    """Paginated list of a hotel's published reviews."""
