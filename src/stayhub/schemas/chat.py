"""Chat message schemas, shared by the HTTP routes and the websocket relay."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class ChatMessageCreate(BaseModel):
    hotel_id: int | None = None
    booking_id: int | None = None
    message: str = Field(..., min_length=1, max_length=2000)
    # "ai" messages are only produced server-side
    sender: Literal["user", "support"] = "user"


class JoinHotelEvent(BaseModel):
    event: Literal["join-hotel"]
    hotel_id: int | None = None


class SendMessageEvent(ChatMessageCreate):
    event: Literal["send-message"]


class ChatMessageResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    user_id: int
    hotel_id: int | None
    booking_id: int | None
    message: str
    sender: str
    is_ai: bool
    created_at: datetime


class ChatDelivery(ChatMessageResponse):
    """A sent message together with the reply suggestions broadcast with it."""

    smart_replies: list[str] = []


class ChatSummaryResponse(BaseModel):
    model_config = {"from_attributes": True}

    booking_id: int
    message_count: int
    summary: str | None
