"""Reusable seed data fixtures for integration tests."""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models import Hotel, Role, Room, User
from tests.factories import make_hotel, make_room, make_user


@pytest_asyncio.fixture
async def customer(db: AsyncSession) -> User:
    user = make_user(email="guest@example.com", name="Grace Guest")
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def other_customer(db: AsyncSession) -> User:
    user = make_user(email="second@example.com", name="Sam Second")
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def owner(db: AsyncSession) -> User:
    """Hotel owner already approved by an admin."""
    user = make_user(
        email="owner@example.com", name="Olga Owner", role=Role.HOTEL_OWNER, is_approved=True
    )
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def pending_owner(db: AsyncSession) -> User:
    user = make_user(email="newowner@example.com", name="Pat Pending", role=Role.HOTEL_OWNER)
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def admin(db: AsyncSession) -> User:
    user = make_user(email="admin@example.com", name="Ada Admin", role=Role.ADMIN)
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def hotel(db: AsyncSession, owner: User) -> Hotel:
    """Approved hotel owned by ``owner``."""
    hotel = make_hotel(owner_id=owner.id)
    db.add(hotel)
    await db.commit()
    return hotel


@pytest_asyncio.fixture
async def room(db: AsyncSession, hotel: Hotel) -> Room:
    """Single-unit room at 100.00 per night."""
    room = make_room(hotel_id=hotel.id, quantity=1)
    db.add(room)
    await db.commit()
    return room


@pytest_asyncio.fixture
async def seeded_catalog(db: AsyncSession, owner: User) -> list[Hotel]:
    """Three approved hotels in two cities plus one unapproved hotel."""
    hotels = [
        make_hotel(
            owner_id=owner.id,
            name="Lakeside Court",
            category="luxury",
            city="Berlin",
            latitude=52.52,
            longitude=13.405,
        ),
        make_hotel(
            owner_id=owner.id,
            name="Spree Budget Inn",
            category="budget",
            city="Berlin",
            latitude=52.50,
            longitude=13.39,
        ),
        make_hotel(
            owner_id=owner.id,
            name="Harbour House",
            category="luxury",
            city="Hamburg",
            latitude=53.55,
            longitude=9.99,
        ),
        make_hotel(owner_id=owner.id, name="Not Yet Open", city="Berlin", is_approved=False),
    ]
    db.add_all(hotels)
    await db.commit()
    return hotels


@pytest_asyncio.fixture
async def rival_owner(db: AsyncSession) -> User:
    """Approved hotel owner who does not own ``hotel``."""
    user = make_user(
        email="rival@example.com", name="Rita Rival", role=Role.HOTEL_OWNER, is_approved=True
    )
    db.add(user)
    await db.commit()
    return user
