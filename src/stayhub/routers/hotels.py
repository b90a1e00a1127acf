"""Hotel catalog endpoints."""

from fastapi import APIRouter, Query

from stayhub.dependencies import DB, ApprovedUser, GeocoderDep, MediaHostDep
from stayhub.models import HotelCategory
from stayhub.schemas.hotel import HotelCreate, HotelListResponse, HotelResponse, HotelUpdate
from stayhub.services import hotel as hotels
from stayhub.services.hotel import DEFAULT_SEARCH_RADIUS_KM

router = APIRouter(prefix="/api/hotels", tags=["hotels"])


@router.get("/search", response_model=list[HotelResponse])
async def search_hotels(
    db: DB,
    category: HotelCategory | None = None,
    city: str | None = Query(None, max_length=100),
    latitude: float | None = Query(None, ge=-90, le=90),
    longitude: float | None = Query(None, ge=-180, le=180),
    radius: float = Query(DEFAULT_SEARCH_RADIUS_KM, gt=0, description="Radius in km"),
) -> list[HotelResponse]:
    result = await hotels.search_hotels(
        db,
        category=category,
        city=city,
        latitude=latitude,
        longitude=longitude,
        radius_km=radius,
    )
    return [HotelResponse.model_validate(hotel) for hotel in result]


@router.get("/my-hotels", response_model=list[HotelResponse])
async def my_hotels(db: DB, user: ApprovedUser) -> list[HotelResponse]:
    result = await hotels.get_my_hotels(db, user)
    return [HotelResponse.model_validate(hotel) for hotel in result]


@router.get("", response_model=HotelListResponse)
async def list_hotels(
    db: DB,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
) -> HotelListResponse:
    """Approved, active hotels, newest first."""
    result = await hotels.get_hotels(db, skip, limit)
    return HotelListResponse.model_validate(result)


@router.get("/{hotel_id}", response_model=HotelResponse)
async def get_hotel(hotel_id: int, db: DB) -> HotelResponse:
    return HotelResponse.model_validate(await hotels.get_hotel_by_id(db, hotel_id))


@router.post("", response_model=HotelResponse, status_code=201)
async def create_hotel(
    payload: HotelCreate, db: DB, user: ApprovedUser, geocoder: GeocoderDep
) -> HotelResponse:
    hotel = await hotels.create_hotel(db, user, payload.model_dump(), geocoder)
    return HotelResponse.model_validate(hotel)


@router.patch("/{hotel_id}", response_model=HotelResponse)
async def update_hotel(
    hotel_id: int,
    payload: HotelUpdate,
    db: DB,
    user: ApprovedUser,
    geocoder: GeocoderDep,
    media_host: MediaHostDep,
) -> HotelResponse:
    hotel = await hotels.update_hotel(
        db,
        user,
        hotel_id,
        payload.model_dump(exclude_unset=True),
        geocoder=geocoder,
        media_host=media_host,
    )
    return HotelResponse.model_validate(hotel)


@router.delete("/{hotel_id}", status_code=204)
async def delete_hotel(
    hotel_id: int, db: DB, user: ApprovedUser, media_host: MediaHostDep
) -> None:
    await hotels.delete_hotel(db, user, hotel_id, media_host=media_host)
