"""Factory functions for creating model instances in tests."""

from datetime import date
from decimal import Decimal

from stayhub.models import Booking, BookingStatus, Hotel, Review, Role, Room, User
from stayhub.security import create_access_token, hash_password

DEFAULT_PASSWORD = "secret123"


def make_user(
    *,
    email: str,
    name: str = "Test User",
    role: Role = Role.CUSTOMER,
    password: str | None = DEFAULT_PASSWORD,
    is_approved: bool | None = None,
) -> User:
    user = User.new_account(
        role,
        name=name,
        email=email,
        password_hash=hash_password(password) if password else None,
    )
    if is_approved is not None:
        user.is_approved = is_approved
    return user


def make_hotel(
    *,
    owner_id: int,
    name: str = "Lakeside Court",
    category: str = "luxury",
    city: str = "Berlin",
    country: str = "Germany",
    is_approved: bool = True,
    latitude: float | None = None,
    longitude: float | None = None,
    images: list[dict[str, str]] | None = None,
) -> Hotel:
    return Hotel(
        owner_id=owner_id,
        name=name,
        description="Quiet rooms by the water.",
        category=category,
        address="Seestrasse 1",
        city=city,
        state="Berlin",
        country=country,
        zip_code="10115",
        latitude=latitude,
        longitude=longitude,
        images=images or [],
        is_approved=is_approved,
    )


def make_room(
    *,
    hotel_id: int,
    name: str = "Deluxe Double",
    type: str = "double",
    price: Decimal = Decimal("100.00"),
    quantity: int = 1,
    capacity_adults: int = 2,
    capacity_children: int = 1,
) -> Room:
    return Room(
        hotel_id=hotel_id,
        name=name,
        description="Two guests, city view.",
        type=type,
        price_base=price,
        capacity_adults=capacity_adults,
        capacity_children=capacity_children,
        quantity=quantity,
        available=quantity,
    )


def make_booking(
    *,
    customer_id: int,
    room: Room,
    check_in: date = date(2026, 1, 10),
    check_out: date = date(2026, 1, 12),
    status: BookingStatus = BookingStatus.CONFIRMED,
    total_amount: Decimal = Decimal("200.00"),
    payment_status: str = "pending",
) -> Booking:
    return Booking(
        customer_id=customer_id,
        hotel_id=room.hotel_id,
        room_id=room.id,
        check_in=check_in,
        check_out=check_out,
        guests_adults=2,
        total_amount=total_amount,
        status=status.value,
        payment_status=payment_status,
    )


def make_review(*, booking: Booking, overall: int, comment: str = "Lovely stay") -> Review:
    return Review(
        customer_id=booking.customer_id,
        hotel_id=booking.hotel_id,
        booking_id=booking.id,
        overall=overall,
        comment=comment,
        is_verified=True,
    )


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}
