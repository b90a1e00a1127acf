"""AI text-generation endpoints. Provider failures are reported as 502."""

from fastapi import APIRouter

from stayhub.dependencies import DB, LLM, ApprovedUser
from stayhub.schemas.ai import (
    BookingSummaryRequest,
    BusinessInsightsRequest,
    BusinessInsightsResponse,
    MarketingContentRequest,
    PricingSuggestionRequest,
    ReviewResponseRequest,
    RoomDescriptionRequest,
    SmartRepliesRequest,
    SmartRepliesResponse,
    TextResponse,
)
from stayhub.services import ai

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/room-description", response_model=TextResponse)
async def room_description(
    payload: RoomDescriptionRequest, user: ApprovedUser, llm: LLM
) -> TextResponse:
    text = await ai.generate_room_description(
        llm,
        room_type=payload.room_type,
        amenities=payload.amenities,
        size=payload.size,
        bed_type=payload.bed_type,
    )
    return TextResponse(text=text)


@router.post("/review-response", response_model=TextResponse)
async def review_response(
    payload: ReviewResponseRequest, db: DB, user: ApprovedUser, llm: LLM
) -> TextResponse:
    text = await ai.generate_review_response(
        db, llm, review_id=payload.review_id, tone=payload.tone
    )
    return TextResponse(text=text)


@router.post("/pricing-suggestion", response_model=TextResponse)
async def pricing_suggestion(
    payload: PricingSuggestionRequest, db: DB, user: ApprovedUser, llm: LLM
) -> TextResponse:
    text = await ai.generate_pricing_suggestion(
        db,
        llm,
        room_id=payload.room_id,
        season=payload.season,
        current_price=payload.current_price,
    )
    return TextResponse(text=text)


@router.post("/marketing-content", response_model=TextResponse)
async def marketing_content(
    payload: MarketingContentRequest, db: DB, user: ApprovedUser, llm: LLM
) -> TextResponse:
    text = await ai.generate_marketing_content(
        db, llm, hotel_id=payload.hotel_id, content_type=payload.type, theme=payload.theme
    )
    return TextResponse(text=text)


@router.post("/smart-replies", response_model=SmartRepliesResponse)
async def smart_replies(
    payload: SmartRepliesRequest, user: ApprovedUser, llm: LLM
) -> SmartRepliesResponse:
    replies = await ai.generate_smart_replies(llm, payload.message, payload.context)
    return SmartRepliesResponse(replies=replies)


@router.post("/booking-summary", response_model=TextResponse)
async def booking_summary(
    payload: BookingSummaryRequest, db: DB, user: ApprovedUser, llm: LLM
) -> TextResponse:
    """Generate a stay summary and store it on the booking."""
    text = await ai.generate_booking_summary(db, llm, user, booking_id=payload.booking_id)
    return TextResponse(text=text)


@router.post("/business-insights", response_model=BusinessInsightsResponse)
async def business_insights(
    payload: BusinessInsightsRequest, db: DB, user: ApprovedUser, llm: LLM
) -> BusinessInsightsResponse:
    result = await ai.generate_business_insights(db, llm, user, hotel_id=payload.hotel_id)
    return BusinessInsightsResponse.model_validate(result)
