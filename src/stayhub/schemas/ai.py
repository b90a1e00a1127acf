"""AI endpoint request and response schemas."""

from decimal import Decimal

from pydantic import BaseModel, Field

from stayhub.models import ResponseTone


class RoomDescriptionRequest(BaseModel):
    room_type: str = Field(..., min_length=1)
    amenities: list[str] = []
    size: str | None = None
    bed_type: str | None = None


class ReviewResponseRequest(BaseModel):
    review_id: int
    tone: ResponseTone = ResponseTone.PROFESSIONAL


class PricingSuggestionRequest(BaseModel):
    room_id: int
    season: str = Field(..., min_length=1)
    current_price: Decimal = Field(..., gt=0)


class MarketingContentRequest(BaseModel):
    hotel_id: int
    type: str = Field(..., min_length=1)
    theme: str | None = None


class SmartRepliesRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000)
    context: str | None = None


class BookingSummaryRequest(BaseModel):
    booking_id: int


class BusinessInsightsRequest(BaseModel):
    hotel_id: int


class TextResponse(BaseModel):
    text: str


class SmartRepliesResponse(BaseModel):
    replies: list[str]


class HotelPerformance(BaseModel):
    model_config = {"from_attributes": True}

    total_bookings: int
    total_revenue: Decimal
    average_rating: float
    review_count: int


class BusinessInsightsResponse(BaseModel):
    model_config = {"from_attributes": True}

    insights: str
    stats: HotelPerformance
