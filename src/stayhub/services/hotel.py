"""Hotel catalog business logic.

New hotels start unapproved and stay out of public listings until an admin
approves them. Location coordinates are resolved through the geocoder when
the caller does not supply them and geocoding is switched on.
"""

import math
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.exceptions import NotFoundError
from stayhub.logging import get_logger
from stayhub.models import Hotel, User
from stayhub.repositories.hotel import (
    count_public_hotels,
    get_hotel,
    list_hotels_by_owner,
    list_public_hotels,
    search_public_hotels,
)
from stayhub.schemas.pagination import Paginated
from stayhub.services.access import ensure_catalog_role, ensure_hotel_manager
from stayhub.services.geocoding import ADDRESS_FIELDS, Geocoder
from stayhub.services.media_host import MediaHost, discard_media, public_ids

logger = get_logger(__name__)

EARTH_RADIUS_KM = 6371.0
DEFAULT_SEARCH_RADIUS_KM = 50.0

# Columns a manager may set directly. Location is handled separately,
# approval and rating never come from the client.
HOTEL_FIELDS = (
    "name",
    "description",
    "category",
    "images",
    "videos",
    "amenities",
    "policies",
    "contact",
    "is_active",
)


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points (haversine)."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


async def get_hotels(db: AsyncSession, skip: int, limit: int) -> Paginated[Hotel]:
    items = await list_public_hotels(db, skip, limit)
    total = await count_public_hotels(db)
    return Paginated(items=items, total=total, skip=skip, limit=limit)


async def get_hotel_by_id(db: AsyncSession, hotel_id: int) -> Hotel:
    hotel = await get_hotel(db, hotel_id)
    if hotel is None:
        raise NotFoundError("Hotel", hotel_id)
    return hotel


async def search_hotels(
    db: AsyncSession,
    *,
    category: str | None = None,
    city: str | None = None,
    latitude: float | None = None,
    longitude: float | None = None,
    radius_km: float = DEFAULT_SEARCH_RADIUS_KM,
) -> list[Hotel]:
    """Search public hotels. With a point given, hotels without coordinates are excluded."""
    hotels = await search_public_hotels(db, category=category, city=city)
    if latitude is None or longitude is None:
        return hotels
    return [
        hotel
        for hotel in hotels
        if hotel.latitude is not None
        and hotel.longitude is not None
        and distance_km(latitude, longitude, hotel.latitude, hotel.longitude) <= radius_km
    ]


async def get_my_hotels(db: AsyncSession, owner: User) -> list[Hotel]:
    ensure_catalog_role(owner)
    return await list_hotels_by_owner(db, owner.id)


def _apply_location(hotel: Hotel, location: Mapping[str, Any]) -> None:
    for field in ADDRESS_FIELDS:
        if field in location:
            setattr(hotel, field, location[field])
    coordinates = location.get("coordinates")
    if coordinates:
        hotel.latitude = coordinates["latitude"]
        hotel.longitude = coordinates["longitude"]


def _address_changed(hotel: Hotel, location: Mapping[str, Any]) -> bool:
    return any(
        field in location and location[field] != getattr(hotel, field) for field in ADDRESS_FIELDS
    )


async def _geocode(hotel: Hotel, geocoder: Geocoder | None) -> None:
    if geocoder is None:
        return
    hotel.latitude, hotel.longitude = await geocoder.resolve(hotel.location)
    logger.info("hotel_geocoded", hotel_id=hotel.id, city=hotel.city)


async def create_hotel(
    db: AsyncSession,
    owner: User,
    data: Mapping[str, Any],
    geocoder: Geocoder | None = None,
) -> Hotel:
    """Create a hotel owned by the caller. Geocoding errors propagate."""
    ensure_catalog_role(owner)

    hotel = Hotel(owner_id=owner.id, is_approved=False)
    for field in HOTEL_FIELDS:
        if field in data and data[field] is not None:
            setattr(hotel, field, data[field])
    location = data["location"]
    _apply_location(hotel, location)
    if not location.get("coordinates"):
        await _geocode(hotel, geocoder)

    db.add(hotel)
    await db.flush()
    await db.refresh(hotel, attribute_names=["owner"])
    logger.info("hotel_created", hotel_id=hotel.id, owner_id=owner.id)
    return hotel


async def update_hotel(
    db: AsyncSession,
    actor: User,
    hotel_id: int,
    changes: Mapping[str, Any],
    *,
    geocoder: Geocoder | None = None,
    media_host: MediaHost | None = None,
) -> Hotel:
    """Patch a hotel. Replaced images are removed from the media host once committed."""
    hotel = await get_hotel_by_id(db, hotel_id)
    ensure_hotel_manager(actor, hotel, "update this hotel")

    location = changes.get("location")
    if location:
        regeocode = _address_changed(hotel, location) and not location.get("coordinates")
        _apply_location(hotel, location)
        if regeocode:
            await _geocode(hotel, geocoder)

    stale_media: list[str] = []
    if changes.get("images") is not None:
        kept = set(public_ids(changes["images"]))
        stale_media = [pid for pid in public_ids(hotel.images) if pid not in kept]

    for field in HOTEL_FIELDS:
        if field in changes and changes[field] is not None:
            setattr(hotel, field, changes[field])
    await db.flush()

    if stale_media and media_host is not None:
        discard_media(db, media_host, stale_media)
    logger.info("hotel_updated", hotel_id=hotel.id, fields=sorted(changes))
    return hotel


async def delete_hotel(
    db: AsyncSession, actor: User, hotel_id: int, *, media_host: MediaHost | None = None
) -> None:
    """Hard delete. Rooms, bookings and reviews go with the hotel."""
    hotel = await get_hotel_by_id(db, hotel_id)
    ensure_hotel_manager(actor, hotel, "delete this hotel")

    await db.refresh(hotel, attribute_names=["rooms"])
    media = public_ids(hotel.images) + public_ids(hotel.videos)
    for room in hotel.rooms:
        media.extend(public_ids(room.images))

    await db.delete(hotel)
    await db.flush()

    if media_host is not None:
        discard_media(db, media_host, media)
    logger.info("hotel_deleted", hotel_id=hotel_id, media_discarded=len(media))
