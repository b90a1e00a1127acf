"""Room (unit type) business logic."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.exceptions import ConflictError, NotFoundError, ValidationFailedError
from stayhub.logging import get_logger
from stayhub.models import Room, User
from stayhub.repositories.booking import count_holding_bookings
from stayhub.repositories.hotel import get_hotel
from stayhub.repositories.room import (
    count_active_rooms,
    get_room,
    list_active_rooms,
    list_rooms_by_hotel,
)
from stayhub.schemas.pagination import Paginated
from stayhub.services.access import ensure_catalog_role, ensure_hotel_manager
from stayhub.services.booking import flush_inventory
from stayhub.services.media_host import MediaHost, discard_media, public_ids

logger = get_logger(__name__)

ROOM_FIELDS = (
    "name",
    "description",
    "type",
    "bed_type",
    "images",
    "amenities",
    "is_active",
)


def _apply_nested(room: Room, data: Mapping[str, Any]) -> None:
    """Copy the nested price/capacity/size shapes onto their flat columns."""
    price = data.get("price")
    if price:
        room.price_base = price["base"]
        if price.get("currency"):
            room.currency = price["currency"]
    capacity = data.get("capacity")
    if capacity:
        if capacity.get("adults") is not None:
            room.capacity_adults = capacity["adults"]
        if capacity.get("children") is not None:
            room.capacity_children = capacity["children"]
    size = data.get("size")
    if size:
        room.size_value = size["value"]
        if size.get("unit"):
            room.size_unit = size["unit"]


async def get_rooms(db: AsyncSession, skip: int, limit: int) -> Paginated[Room]:
    items = await list_active_rooms(db, skip, limit)
    total = await count_active_rooms(db)
    return Paginated(items=items, total=total, skip=skip, limit=limit)


async def get_room_by_id(db: AsyncSession, room_id: int) -> Room:
    room = await get_room(db, room_id)
    if room is None:
        raise NotFoundError("Room", room_id)
    return room


async def get_hotel_rooms(db: AsyncSession, hotel_id: int) -> list[Room]:
    return await list_rooms_by_hotel(db, hotel_id)


async def create_room(db: AsyncSession, actor: User, data: Mapping[str, Any]) -> Room:
    """Add a room type to a hotel. ``available`` starts at ``quantity`` unless given."""
    ensure_catalog_role(actor)
    hotel = await get_hotel(db, data["hotel_id"])
    if hotel is None:
        raise NotFoundError("Hotel", data["hotel_id"])
    ensure_hotel_manager(actor, hotel, "create rooms for this hotel")

    quantity = data.get("quantity") or 1
    available = data.get("available")
    room = Room(
        hotel_id=hotel.id,
        quantity=quantity,
        available=quantity if available is None else available,
    )
    for field in ROOM_FIELDS:
        if data.get(field) is not None:
            setattr(room, field, data[field])
    _apply_nested(room, data)

    db.add(room)
    await db.flush()
    await db.refresh(room, attribute_names=["hotel"])
    logger.info("room_created", room_id=room.id, hotel_id=hotel.id, quantity=quantity)
    return room


async def _managed_room(db: AsyncSession, actor: User, room_id: int, action: str) -> Room:
    room = await get_room(db, room_id, for_update=True)
    if room is None:
        raise NotFoundError("Room", room_id)
    ensure_hotel_manager(actor, room.hotel, action)
    return room


async def update_room(
    db: AsyncSession,
    actor: User,
    room_id: int,
    changes: Mapping[str, Any],
    *,
    media_host: MediaHost | None = None,
) -> Room:
    """Patch a room type.

    A new ``quantity`` recomputes ``available`` from the bookings that currently
    hold a unit. Shrinking below that number is rejected.
    """
    room = await _managed_room(db, actor, room_id, "update this room")

    quantity = changes.get("quantity")
    if quantity is not None and quantity != room.quantity:
        holding = await count_holding_bookings(db, room.id)
        if quantity < holding:
            raise ValidationFailedError(
                "Quantity cannot be lower than the number of active bookings",
                [f"Room has {holding} active bookings"],
            )
        room.quantity = quantity
        room.available = quantity - holding

    stale_media: list[str] = []
    if changes.get("images") is not None:
        kept = set(public_ids(changes["images"]))
        stale_media = [pid for pid in public_ids(room.images) if pid not in kept]

    for field in ROOM_FIELDS:
        if field in changes and changes[field] is not None:
            setattr(room, field, changes[field])
    _apply_nested(room, changes)
    await flush_inventory(db, ConflictError("Room was modified concurrently, please retry"))

    if stale_media and media_host is not None:
        discard_media(db, media_host, stale_media)
    logger.info("room_updated", room_id=room.id, fields=sorted(changes))
    return room


async def delete_room(
    db: AsyncSession, actor: User, room_id: int, *, media_host: MediaHost | None = None
) -> None:
    room = await _managed_room(db, actor, room_id, "delete this room")
    media = public_ids(room.images)
    await db.delete(room)
    await db.flush()
    if media_host is not None:
        discard_media(db, media_host, media)
    logger.info("room_deleted", room_id=room_id)
