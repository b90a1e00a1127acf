from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models import BookingStatus, Hotel, Room, User
from tests.factories import DEFAULT_PASSWORD, auth_headers, make_booking, make_hotel

URL = "/api/admin"


# ---------------------------------------------------------------------------
# 1. Access
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path",
    [
        ("GET", "/pending-approvals"),
        ("GET", "/users"),
        ("GET", "/analytics"),
        ("PATCH", "/hotels/1/approve"),
        ("PATCH", "/users/1/approve"),
    ],
)
async def test_admin_endpoints_reject_non_admins(
    client: AsyncClient, owner: User, method: str, path: str
) -> None:
    resp = await client.request(method, f"{URL}{path}", headers=auth_headers(owner))

    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "Admin access required"


@pytest.mark.asyncio
async def test_admin_endpoints_require_auth(client: AsyncClient, db: AsyncSession) -> None:
    resp = await client.get(f"{URL}/analytics")
    assert resp.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("target", ["hotels", "users"])
async def test_approval_is_a_patch(client: AsyncClient, admin: User, target: str) -> None:
    resp = await client.put(f"{URL}/{target}/1/approve", headers=auth_headers(admin))
    assert resp.status_code == 405


# ---------------------------------------------------------------------------
# 2. Approvals
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_pending_approvals(
    client: AsyncClient,
    admin: User,
    pending_owner: User,
    seeded_catalog: list[Hotel],
) -> None:
    resp = await client.get(f"{URL}/pending-approvals", headers=auth_headers(admin))

    assert resp.status_code == 200
    body = resp.json()
    assert [hotel["name"] for hotel in body["hotels"]] == ["Not Yet Open"]
    assert [user["id"] for user in body["owners"]] == [pending_owner.id]


@pytest.mark.asyncio
async def test_approve_owner_lifts_soft_block(
    client: AsyncClient, admin: User, pending_owner: User
) -> None:
    resp = await client.patch(
        f"{URL}/users/{pending_owner.id}/approve", headers=auth_headers(admin)
    )

    assert resp.status_code == 200
    assert resp.json()["is_approved"] is True

    login = await client.post(
        "/api/auth/login", json={"email": pending_owner.email, "password": DEFAULT_PASSWORD}
    )
    assert login.json()["approval_pending"] is False

    again = await client.patch(
        f"{URL}/users/{pending_owner.id}/approve", headers=auth_headers(admin)
    )
    assert again.status_code == 200


@pytest.mark.asyncio
async def test_approve_hotel_makes_it_public(
    client: AsyncClient, db: AsyncSession, admin: User, owner: User
) -> None:
    hotel = make_hotel(owner_id=owner.id, is_approved=False)
    db.add(hotel)
    await db.commit()
    assert (await client.get("/api/hotels")).json()["total"] == 0

    resp = await client.patch(f"{URL}/hotels/{hotel.id}/approve", headers=auth_headers(admin))

    assert resp.status_code == 200
    assert resp.json()["is_approved"] is True
    assert (await client.get("/api/hotels")).json()["total"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("target", ["hotels", "users"])
async def test_approve_missing_target(client: AsyncClient, admin: User, target: str) -> None:
    resp = await client.patch(f"{URL}/{target}/999/approve", headers=auth_headers(admin))
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# 3. User directory
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params, expected",
    [
        ({}, {"guest@example.com", "owner@example.com", "newowner@example.com", "admin@example.com"}),
        ({"role": "hotel_owner"}, {"owner@example.com", "newowner@example.com"}),
        ({"role": "hotel_owner", "is_approved": "false"}, {"newowner@example.com"}),
        ({"search": "grace"}, {"guest@example.com"}),
        ({"search": "OWNER@"}, {"owner@example.com", "newowner@example.com"}),
    ],
    ids=["all", "role", "role_and_approval", "name_search", "email_search"],
)
async def test_user_directory_filters(
    client: AsyncClient,
    admin: User,
    customer: User,
    owner: User,
    pending_owner: User,
    params: dict[str, str],
    expected: set[str],
) -> None:
    resp = await client.get(f"{URL}/users", params=params, headers=auth_headers(admin))

    assert resp.status_code == 200
    body = resp.json()
    assert {user["email"] for user in body["items"]} == expected
    assert body["total"] == len(expected)


# ---------------------------------------------------------------------------
# 4. Analytics
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_platform_analytics(
    client: AsyncClient,
    db: AsyncSession,
    admin: User,
    customer: User,
    pending_owner: User,
    room: Room,
) -> None:
    db.add(make_hotel(owner_id=pending_owner.id, is_approved=False))
    db.add_all(
        [
            make_booking(
                customer_id=customer.id,
                room=room,
                status=BookingStatus.CHECKED_OUT,
                total_amount=Decimal("200.00"),
                payment_status="paid",
            ),
            make_booking(
                customer_id=customer.id,
                room=room,
                status=BookingStatus.CONFIRMED,
                total_amount=Decimal("150.00"),
                payment_status="paid",
            ),
            make_booking(
                customer_id=customer.id,
                room=room,
                status=BookingStatus.PENDING,
                total_amount=Decimal("999.00"),
            ),
        ]
    )
    await db.commit()

    resp = await client.get(f"{URL}/analytics", headers=auth_headers(admin))

    assert resp.status_code == 200
    body = resp.json()
    assert body["hotels"] == {"total": 2, "approved": 1, "pending": 1}
    assert body["users"] == {"total": 4, "customers": 1, "owners": 2, "admins": 1}
    assert body["bookings"] == {"total": 3, "confirmed": 1, "completed": 1}
    assert Decimal(str(body["revenue"])) == Decimal("350.00")
