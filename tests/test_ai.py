from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.exceptions import ProviderUnavailableError
from stayhub.models import BookingStatus, Hotel, Room, User
from stayhub.services.ai import parse_replies
from tests.factories import auth_headers, make_booking, make_review
from tests.fakes import FakeGenerator

URL = "/api/ai"


def test_parse_replies_skips_blank_lines() -> None:
    assert parse_replies("  a \n\n b\n c\n d") == ["a", "b", "c"]
    assert parse_replies("") == []


# ---------------------------------------------------------------------------
# 1. Stateless generators
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_room_description(client: AsyncClient, owner: User, llm: FakeGenerator) -> None:
    llm.reply = "A bright suite."

    resp = await client.post(
        f"{URL}/room-description",
        json={"room_type": "suite", "amenities": ["balcony", "minibar"], "bed_type": "king"},
        headers=auth_headers(owner),
    )

    assert resp.status_code == 200
    assert resp.json() == {"text": "A bright suite."}
    assert "suite" in llm.prompts[0]
    assert "balcony, minibar" in llm.prompts[0]


@pytest.mark.asyncio
async def test_smart_replies_endpoint(
    client: AsyncClient, customer: User, llm: FakeGenerator
) -> None:
    llm.reply = "Yes\nNo\nMaybe\nLater"

    resp = await client.post(
        f"{URL}/smart-replies", json={"message": "Do you have a pool?"}, headers=auth_headers(customer)
    )

    assert resp.status_code == 200
    assert resp.json()["replies"] == ["Yes", "No", "Maybe"]


@pytest.mark.asyncio
async def test_provider_failure_is_502(
    client: AsyncClient, owner: User, llm: FakeGenerator
) -> None:
    llm.error = ProviderUnavailableError()

    resp = await client.post(
        f"{URL}/room-description", json={"room_type": "single"}, headers=auth_headers(owner)
    )

    assert resp.status_code == 502
    assert resp.json()["error"] == {
        "code": "upstream_unavailable",
        "message": "Failed to generate AI response",
    }


@pytest.mark.asyncio
async def test_ai_requires_approved_account(
    client: AsyncClient, pending_owner: User, llm: FakeGenerator
) -> None:
    resp = await client.post(
        f"{URL}/room-description", json={"room_type": "single"}, headers=auth_headers(pending_owner)
    )

    assert resp.status_code == 403
    assert llm.prompts == []


# ---------------------------------------------------------------------------
# 2. Generators reading stored data
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_review_response_uses_review_text(
    client: AsyncClient,
    db: AsyncSession,
    customer: User,
    owner: User,
    room: Room,
    llm: FakeGenerator,
) -> None:
    booking = make_booking(customer_id=customer.id, room=room)
    db.add(booking)
    await db.flush()
    review = make_review(booking=booking, overall=2, comment="Cold shower")
    db.add(review)
    await db.commit()

    resp = await client.post(
        f"{URL}/review-response",
        json={"review_id": review.id, "tone": "apologetic"},
        headers=auth_headers(owner),
    )

    assert resp.status_code == 200
    assert "Cold shower" in llm.prompts[0]
    assert "apologetic" in llm.prompts[0]
    # drafts are not stored
    assert review.response_text is None


@pytest.mark.asyncio
async def test_pricing_and_marketing(
    client: AsyncClient, owner: User, hotel: Hotel, room: Room, llm: FakeGenerator
) -> None:
    pricing = await client.post(
        f"{URL}/pricing-suggestion",
        json={"room_id": room.id, "season": "summer", "current_price": "100.00"},
        headers=auth_headers(owner),
    )
    marketing = await client.post(
        f"{URL}/marketing-content",
        json={"hotel_id": hotel.id, "type": "social media", "theme": "winter getaway"},
        headers=auth_headers(owner),
    )

    assert pricing.status_code == 200
    assert marketing.status_code == 200
    assert "summer" in llm.prompts[0]
    assert hotel.name in llm.prompts[1]
    assert "winter getaway" in llm.prompts[1]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path, payload",
    [
        ("/review-response", {"review_id": 999}),
        ("/pricing-suggestion", {"room_id": 999, "season": "winter", "current_price": "90"}),
        ("/marketing-content", {"hotel_id": 999, "type": "email"}),
    ],
    ids=["review", "room", "hotel"],
)
async def test_missing_subject_is_404(
    client: AsyncClient, owner: User, path: str, payload: dict[str, object]
) -> None:
    resp = await client.post(f"{URL}{path}", json=payload, headers=auth_headers(owner))
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_booking_summary_is_stored(
    client: AsyncClient,
    db: AsyncSession,
    customer: User,
    other_customer: User,
    room: Room,
    llm: FakeGenerator,
) -> None:
    llm.reply = "Two nights at Lakeside Court."
    booking = make_booking(customer_id=customer.id, room=room)
    db.add(booking)
    await db.commit()

    resp = await client.post(
        f"{URL}/booking-summary", json={"booking_id": booking.id}, headers=auth_headers(customer)
    )

    assert resp.status_code == 200
    assert booking.ai_summary == "Two nights at Lakeside Court."
    detail = await client.get(f"/api/bookings/{booking.id}", headers=auth_headers(customer))
    assert detail.json()["ai_summary"] == "Two nights at Lakeside Court."

    resp = await client.post(
        f"{URL}/booking-summary",
        json={"booking_id": booking.id},
        headers=auth_headers(other_customer),
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_business_insights_stats(
    client: AsyncClient,
    db: AsyncSession,
    customer: User,
    owner: User,
    room: Room,
    llm: FakeGenerator,
) -> None:
    bookings = [
        make_booking(
            customer_id=customer.id,
            room=room,
            status=BookingStatus.CHECKED_OUT,
            total_amount=Decimal("200.00"),
        ),
        make_booking(
            customer_id=customer.id,
            room=room,
            status=BookingStatus.CANCELLED,
            total_amount=Decimal("50.00"),
        ),
    ]
    db.add_all(bookings)
    await db.flush()
    db.add_all([make_review(booking=bookings[0], overall=4), make_review(booking=bookings[1], overall=5)])
    await db.commit()

    resp = await client.post(
        f"{URL}/business-insights", json={"hotel_id": room.hotel_id}, headers=auth_headers(owner)
    )

    assert resp.status_code == 200
    stats = resp.json()["stats"]
    assert stats["total_bookings"] == 2
    assert Decimal(str(stats["total_revenue"])) == Decimal("250.00")
    assert stats["average_rating"] == 4.5
    assert stats["review_count"] == 2
    assert resp.json()["insights"] == "Generated text"


@pytest.mark.asyncio
async def test_business_insights_only_for_managers(
    client: AsyncClient, customer: User, hotel: Hotel
) -> None:
    resp = await client.post(
        f"{URL}/business-insights", json={"hotel_id": hotel.id}, headers=auth_headers(customer)
    )
    assert resp.status_code == 403
