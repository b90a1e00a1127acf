"""Chat endpoints: history and send over HTTP, live relay over a websocket."""

from typing import Any

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError

from stayhub.db.session import session_scope
from stayhub.dependencies import DB, LLM, CurrentUser, Hub
from stayhub.exceptions import AuthenticationError, DomainError
from stayhub.logging import get_logger
from stayhub.repositories.user import get_user
from stayhub.schemas.chat import (
    ChatDelivery,
    ChatMessageCreate,
    ChatMessageResponse,
    ChatSummaryResponse,
    JoinHotelEvent,
    SendMessageEvent,
)
from stayhub.security import decode_access_token
from stayhub.services import ai, chat
from stayhub.services.chat import ChatHub
from stayhub.services.llm_client import TextGenerator

logger = get_logger(__name__)

router = APIRouter(tags=["chat"])

SEND_FAILED = {"event": "error", "message": "Failed to send message"}


@router.get("/api/chat", response_model=list[ChatMessageResponse])
async def general_history(
    db: DB, user: CurrentUser, limit: int = Query(50, ge=1, le=200)
) -> list[ChatMessageResponse]:
    messages = await chat.get_history(db, user, None, limit=limit)
    return [ChatMessageResponse.model_validate(message) for message in messages]


@router.get("/api/chat/summary/{booking_id}", response_model=ChatSummaryResponse)
async def booking_chat_summary(
    booking_id: int, db: DB, user: CurrentUser, llm: LLM
) -> ChatSummaryResponse:
    """AI summary of a booking's conversation. Provider failures are reported as 502."""
    result = await ai.generate_chat_summary(db, llm, user, booking_id=booking_id)
    return ChatSummaryResponse.model_validate(result)


@router.get("/api/chat/{hotel_id}", response_model=list[ChatMessageResponse])
async def hotel_history(
    hotel_id: int, db: DB, user: CurrentUser, limit: int = Query(50, ge=1, le=200)
) -> list[ChatMessageResponse]:
    messages = await chat.get_history(db, user, hotel_id, limit=limit)
    return [ChatMessageResponse.model_validate(message) for message in messages]


@router.post("/api/chat", response_model=ChatDelivery, status_code=201)
async def send_message(
    payload: ChatMessageCreate, db: DB, user: CurrentUser, llm: LLM, chat_hub: Hub
) -> ChatDelivery:
    message = await chat.record_message(
        db,
        user,
        message=payload.message,
        hotel_id=payload.hotel_id,
        booking_id=payload.booking_id,
        sender=payload.sender,
    )
    event = await chat.deliver(chat_hub, llm, message)
    return ChatDelivery.model_validate(event["data"])


async def _authenticate(token: str) -> int:
    user_id = decode_access_token(token)
    async with session_scope() as db:
        if await get_user(db, user_id) is None:
            raise AuthenticationError("User not found")
    return user_id


async def _handle_send(
    event: SendMessageEvent, user_id: int, chat_hub: ChatHub, llm: TextGenerator
) -> None:
    # Commit before broadcasting so subscribers never see a message that is rolled back
    async with session_scope() as db:
        user = await get_user(db, user_id)
        if user is None:
            raise AuthenticationError("User not found")
        message = await chat.record_message(
            db,
            user,
            message=event.message,
            hotel_id=event.hotel_id,
            booking_id=event.booking_id,
            sender=event.sender,
        )
    await chat.deliver(chat_hub, llm, message)


async def _dispatch(
    websocket: WebSocket, data: Any, user_id: int, chat_hub: ChatHub, llm: TextGenerator
) -> None:
    kind = data.get("event") if isinstance(data, dict) else None
    if kind == "join-hotel":
        join = JoinHotelEvent.model_validate(data)
        chat_hub.join(chat.channel_for(join.hotel_id), websocket)
    elif kind == "send-message":
        await _handle_send(SendMessageEvent.model_validate(data), user_id, chat_hub, llm)
    else:
        await websocket.send_json({"event": "error", "message": "Unknown event"})


@router.websocket("/ws/chat")
async def chat_socket(
    websocket: WebSocket, chat_hub: Hub, llm: LLM, token: str = Query(...)
) -> None:
    """Live chat. Clients send ``join-hotel`` and ``send-message`` events."""
    try:
        user_id = await _authenticate(token)
    except AuthenticationError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    logger.info("chat_connected", user_id=user_id)
    try:
        while True:
            data = await websocket.receive_json()
            try:
                await _dispatch(websocket, data, user_id, chat_hub, llm)
            except (DomainError, ValidationError) as exc:
                logger.warning("chat_event_failed", user_id=user_id, error=str(exc))
                await websocket.send_json(SEND_FAILED)
    except WebSocketDisconnect:
        logger.info("chat_disconnected", user_id=user_id)
    finally:
        chat_hub.leave(websocket)
