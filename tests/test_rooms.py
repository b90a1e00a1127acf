from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub import background
from stayhub.models import BookingStatus, Hotel, Room, User
from tests.factories import auth_headers, make_booking, make_room
from tests.fakes import RecordingMediaHost

URL = "/api/rooms"


def _room_payload(hotel: Hotel, **overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "hotel_id": hotel.id,
        "name": "Garden Suite",
        "description": "Suite with a private garden.",
        "type": "suite",
        "price": {"base": "150.00"},
        "capacity": {"adults": 3, "children": 2},
        "size": {"value": 45, "unit": "sqm"},
        "bed_type": "king",
        "quantity": 3,
    }
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# 1. Creating rooms
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_create_room_available_defaults_to_quantity(
    client: AsyncClient, owner: User, hotel: Hotel
) -> None:
    resp = await client.post(URL, json=_room_payload(hotel), headers=auth_headers(owner))

    assert resp.status_code == 201
    body = resp.json()
    assert body["quantity"] == 3
    assert body["available"] == 3
    assert Decimal(str(body["price"]["base"])) == Decimal("150.00")
    assert body["price"]["currency"] == "USD"
    assert body["capacity"] == {"adults": 3, "children": 2}
    assert body["size"] == {"value": 45.0, "unit": "sqm"}
    assert body["hotel"]["id"] == hotel.id


@pytest.mark.asyncio
async def test_create_room_explicit_available(
    client: AsyncClient, owner: User, hotel: Hotel
) -> None:
    resp = await client.post(
        URL, json=_room_payload(hotel, available=1), headers=auth_headers(owner)
    )

    assert resp.status_code == 201
    assert resp.json()["available"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [{"price": {"base": "0"}}, {"quantity": 0}, {"type": "penthouse"}],
    ids=["free", "no_units", "unknown_type"],
)
async def test_create_room_validates_input(
    client: AsyncClient, owner: User, hotel: Hotel, overrides: dict[str, object]
) -> None:
    resp = await client.post(
        URL, json=_room_payload(hotel, **overrides), headers=auth_headers(owner)
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_create_room_for_unknown_hotel(client: AsyncClient, owner: User) -> None:
    resp = await client.post(
        URL,
        json={
            "hotel_id": 999,
            "name": "Ghost",
            "description": "Nowhere",
            "type": "single",
            "price": {"base": "10"},
        },
        headers=auth_headers(owner),
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_customer_cannot_create_room(
    client: AsyncClient, customer: User, hotel: Hotel
) -> None:
    resp = await client.post(URL, json=_room_payload(hotel), headers=auth_headers(customer))
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_other_owner_cannot_create_room(
    client: AsyncClient, rival_owner: User, hotel: Hotel
) -> None:
    resp = await client.post(URL, json=_room_payload(hotel), headers=auth_headers(rival_owner))

    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "Not authorized to create rooms for this hotel"


# ---------------------------------------------------------------------------
# 2. Updating rooms
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_quantity_change_recomputes_available(
    client: AsyncClient, db: AsyncSession, owner: User, customer: User, room: Room
) -> None:
    db.add(make_booking(customer_id=customer.id, room=room))
    room.available = 0
    await db.commit()

    resp = await client.patch(
        f"{URL}/{room.id}", json={"quantity": 3}, headers=auth_headers(owner)
    )

    assert resp.status_code == 200
    assert resp.json()["quantity"] == 3
    assert resp.json()["available"] == 2


@pytest.mark.asyncio
async def test_quantity_cannot_drop_below_active_bookings(
    client: AsyncClient, db: AsyncSession, owner: User, customer: User, hotel: Hotel
) -> None:
    room = make_room(hotel_id=hotel.id, quantity=3)
    db.add(room)
    await db.flush()
    db.add_all(
        [
            make_booking(customer_id=customer.id, room=room),
            make_booking(customer_id=customer.id, room=room),
            make_booking(customer_id=customer.id, room=room, status=BookingStatus.CANCELLED),
        ]
    )
    room.available = 1
    await db.commit()

    resp = await client.patch(
        f"{URL}/{room.id}", json={"quantity": 1}, headers=auth_headers(owner)
    )

    assert resp.status_code == 422
    assert room.quantity == 3

    resp = await client.patch(
        f"{URL}/{room.id}", json={"quantity": 2}, headers=auth_headers(owner)
    )
    assert resp.status_code == 200
    assert resp.json()["available"] == 0


@pytest.mark.asyncio
async def test_update_price_and_images(
    client: AsyncClient,
    db: AsyncSession,
    owner: User,
    room: Room,
    media_host: RecordingMediaHost,
) -> None:
    room.images = [{"url": "https://cdn.example.com/old.jpg", "public_id": "old"}]
    await db.commit()

    resp = await client.patch(
        f"{URL}/{room.id}",
        json={
            "price": {"base": "120.00", "currency": "EUR"},
            "images": [{"url": "https://cdn.example.com/new.jpg", "public_id": "new"}],
        },
        headers=auth_headers(owner),
    )
    await background.drain()

    assert resp.status_code == 200
    assert resp.json()["price"]["currency"] == "EUR"
    assert Decimal(str(resp.json()["price"]["base"])) == Decimal("120.00")
    assert media_host.deleted == ["old"]


@pytest.mark.asyncio
async def test_customer_cannot_update_room(
    client: AsyncClient, customer: User, room: Room
) -> None:
    resp = await client.patch(
        f"{URL}/{room.id}", json={"name": "Mine"}, headers=auth_headers(customer)
    )
    assert resp.status_code == 403


# ---------------------------------------------------------------------------
# 3. Reading and deleting
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_hotel_rooms_cheapest_first(
    client: AsyncClient, db: AsyncSession, hotel: Hotel
) -> None:
    db.add_all(
        [
            make_room(hotel_id=hotel.id, name="Suite", type="suite", price=Decimal("300")),
            make_room(hotel_id=hotel.id, name="Single", type="single", price=Decimal("80")),
        ]
    )
    await db.commit()

    resp = await client.get(f"{URL}/hotel/{hotel.id}")

    assert resp.status_code == 200
    assert [room["name"] for room in resp.json()] == ["Single", "Suite"]

    listing = await client.get(URL)
    assert listing.json()["total"] == 2


@pytest.mark.asyncio
async def test_delete_room(client: AsyncClient, owner: User, room: Room) -> None:
    room_id = room.id

    resp = await client.delete(f"{URL}/{room_id}", headers=auth_headers(owner))

    assert resp.status_code == 204
    assert (await client.get(f"{URL}/{room_id}")).status_code == 404
