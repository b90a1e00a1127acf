"""Room endpoints."""

from fastapi import APIRouter, Query

from stayhub.dependencies import DB, ApprovedUser, MediaHostDep
from stayhub.schemas.room import RoomCreate, RoomListResponse, RoomResponse, RoomUpdate
from stayhub.services import room as rooms

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


@router.get("", response_model=RoomListResponse)
async def list_rooms(
    db: DB,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
) -> RoomListResponse:
    return RoomListResponse.model_validate(await rooms.get_rooms(db, skip, limit))


@router.get("/hotel/{hotel_id}", response_model=list[RoomResponse])
async def list_hotel_rooms(hotel_id: int, db: DB) -> list[RoomResponse]:
    """Active rooms of a hotel, cheapest first."""
    return [RoomResponse.model_validate(room) for room in await rooms.get_hotel_rooms(db, hotel_id)]


@router.get("/{room_id}", response_model=RoomResponse)
async def get_room(room_id: int, db: DB) -> RoomResponse:
    return RoomResponse.model_validate(await rooms.get_room_by_id(db, room_id))


@router.post("", response_model=RoomResponse, status_code=201)
async def create_room(payload: RoomCreate, db: DB, user: ApprovedUser) -> RoomResponse:
    room = await rooms.create_room(db, user, payload.model_dump())
    return RoomResponse.model_validate(room)


@router.patch("/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: int, payload: RoomUpdate, db: DB, user: ApprovedUser, media_host: MediaHostDep
) -> RoomResponse:
    room = await rooms.update_room(
        db, user, room_id, payload.model_dump(exclude_unset=True), media_host=media_host
    )
    return RoomResponse.model_validate(room)


@router.delete("/{room_id}", status_code=204)
async def delete_room(room_id: int, db: DB, user: ApprovedUser, media_host: MediaHostDep) -> None:
    await rooms.delete_room(db, user, room_id, media_host=media_host)
