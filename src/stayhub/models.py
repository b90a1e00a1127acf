"""SQLAlchemy models.

Define all ORM models here. They must inherit from Base so that
Alembic's autogenerate can detect them.

Nested shapes that the API exposes (hotel location, room price, booking guests,
review ratings) are stored as flat columns and reassembled by read-only
properties, so queries can filter on them directly.
"""

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stayhub.db.session import Base  # noqa: F401


class Role(StrEnum):
    CUSTOMER = "customer"
    HOTEL_OWNER = "hotel_owner"
    ADMIN = "admin"


class OAuthProvider(StrEnum):
    GOOGLE = "google"
    GITHUB = "github"


class HotelCategory(StrEnum):
    BUDGET = "budget"
    MID_RANGE = "mid-range"
    LUXURY = "luxury"
    BOUTIQUE = "boutique"
    RESORT = "resort"


class RoomType(StrEnum):
    SINGLE = "single"
    DOUBLE = "double"
    TWIN = "twin"
    SUITE = "suite"
    DELUXE = "deluxe"
    PRESIDENTIAL = "presidential"


class BedType(StrEnum):
    SINGLE = "single"
    DOUBLE = "double"
    QUEEN = "queen"
    KING = "king"
    BUNK = "bunk"


class SizeUnit(StrEnum):
    SQFT = "sqft"
    SQM = "sqm"


class BookingStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"


class PaymentStatus(StrEnum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    FAILED = "failed"


class PaymentMethod(StrEnum):
    CARD = "card"
    PAYPAL = "paypal"
    CASH = "cash"
    OTHER = "other"


class ResponseTone(StrEnum):
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    APOLOGETIC = "apologetic"
    GRATEFUL = "grateful"


class Sentiment(StrEnum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class ChatSender(StrEnum):
    USER = "user"
    SUPPORT = "support"
    AI = "ai"


def _utcnow() -> datetime:
    return datetime.now(UTC)


# Bookings in these states occupy a room for their date range.
HOLDING_STATUSES: tuple[str, ...] = (
    BookingStatus.PENDING.value,
    BookingStatus.CONFIRMED.value,
    BookingStatus.CHECKED_IN.value,
)


def _in(column: str, enum: type[StrEnum]) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum)
    return f"{column} IN ({values})"


# Customers and admins can use the platform right away; owners wait for an admin.
_APPROVED_ON_SIGNUP: dict[Role, bool] = {
    Role.CUSTOMER: True,
    Role.HOTEL_OWNER: False,
    Role.ADMIN: True,
}


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("oauth_provider", "oauth_id", name="uq_users_oauth_identity"),
        CheckConstraint(_in("role", Role), name="role_valid"),
    )
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True)
    password_hash: Mapped[str | None] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), index=True)
    is_approved: Mapped[bool] = mapped_column(Boolean)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    oauth_provider: Mapped[str | None] = mapped_column(String(20))
    oauth_id: Mapped[str | None] = mapped_column(String(255))
    profile_image: Mapped[str | None] = mapped_column(String(500))
    phone: Mapped[str | None] = mapped_column(String(30))
    street: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(100))
    zip_code: Mapped[str | None] = mapped_column(String(20))
    country: Mapped[str | None] = mapped_column(String(100))
    reset_password_token: Mapped[str | None] = mapped_column(String(64), index=True)
    reset_password_expire: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=_utcnow
    )

    hotels: Mapped[list["Hotel"]] = relationship(back_populates="owner")

    @classmethod
    def new_account(cls, role: Role, **fields: Any) -> "User":
        """Build an account with the approval state its role starts with."""
        fields.setdefault("is_verified", False)
        return cls(role=role.value, is_approved=_APPROVED_ON_SIGNUP[role], **fields)

    @property
    def address(self) -> dict[str, str | None] | None:
        parts = {
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "country": self.country,
        }
        return parts if any(parts.values()) else None

    @property
    def approval_pending(self) -> bool:
        return self.role == Role.HOTEL_OWNER and not self.is_approved


class Hotel(Base):
    __tablename__ = "hotels"
    __table_args__ = (
        CheckConstraint(_in("category", HotelCategory), name="category_valid"),
        CheckConstraint("rating_average >= 0 AND rating_average <= 5", name="rating_range"),
        Index("ix_hotels_approved_active", "is_approved", "is_active"),
    )
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(20), index=True)
    address: Mapped[str] = mapped_column(String(255))
    city: Mapped[str] = mapped_column(String(100), index=True)
    state: Mapped[str] = mapped_column(String(100))
    country: Mapped[str] = mapped_column(String(100))
    zip_code: Mapped[str | None] = mapped_column(String(20))
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)
    images: Mapped[list[dict[str, str]]] = mapped_column(JSON, default=lambda: [])
    videos: Mapped[list[dict[str, str]]] = mapped_column(JSON, default=lambda: [])
    amenities: Mapped[list[str]] = mapped_column(JSON, default=lambda: [])
    policies: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    contact: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    rating_average: Mapped[float] = mapped_column(Float, default=0.0)
    rating_count: Mapped[int] = mapped_column(default=0)
    is_approved: Mapped[bool] = mapped_column(Boolean, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=_utcnow
    )

    owner: Mapped["User"] = relationship(back_populates="hotels")
    rooms: Mapped[list["Room"]] = relationship(
        back_populates="hotel", cascade="all, delete-orphan"
    )
    bookings: Mapped[list["Booking"]] = relationship(
        back_populates="hotel", cascade="all, delete-orphan"
    )
    reviews: Mapped[list["Review"]] = relationship(
        back_populates="hotel", cascade="all, delete-orphan"
    )

    @property
    def location(self) -> dict[str, Any]:
        coordinates = None
        if self.latitude is not None and self.longitude is not None:
            coordinates = {"latitude": self.latitude, "longitude": self.longitude}
        return {
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "country": self.country,
            "zip_code": self.zip_code,
            "coordinates": coordinates,
        }

    @property
    def rating(self) -> dict[str, float | int]:
        return {"average": self.rating_average, "count": self.rating_count}


class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (
        CheckConstraint(_in("type", RoomType), name="type_valid"),
        CheckConstraint("price_base > 0", name="price_positive"),
        CheckConstraint("quantity >= 1", name="quantity_min"),
        CheckConstraint("available >= 0", name="available_non_negative"),
        CheckConstraint("capacity_adults >= 1", name="capacity_adults_min"),
        CheckConstraint("capacity_children >= 0", name="capacity_children_min"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    hotel_id: Mapped[int] = mapped_column(ForeignKey("hotels.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)
    type: Mapped[str] = mapped_column(String(20))
    price_base: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    capacity_adults: Mapped[int] = mapped_column(default=2)
    capacity_children: Mapped[int] = mapped_column(default=0)
    size_value: Mapped[float | None] = mapped_column(Float)
    size_unit: Mapped[str] = mapped_column(String(4), default=SizeUnit.SQFT.value)
    bed_type: Mapped[str | None] = mapped_column(String(10))
    images: Mapped[list[dict[str, str]]] = mapped_column(JSON, default=lambda: [])
    amenities: Mapped[list[str]] = mapped_column(JSON, default=lambda: [])
    quantity: Mapped[int]
    # Cached max(0, quantity - holding bookings), refreshed under the room lock.
    # Date overlap against quantity is what decides availability.
    available: Mapped[int]
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    version: Mapped[int] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=_utcnow
    )

    __mapper_args__ = {"eager_defaults": True, "version_id_col": version}

    hotel: Mapped["Hotel"] = relationship(back_populates="rooms")
    bookings: Mapped[list["Booking"]] = relationship(
        back_populates="room", cascade="all, delete-orphan"
    )

    @property
    def price(self) -> dict[str, Any]:
        return {"base": self.price_base, "currency": self.currency}

    @property
    def capacity(self) -> dict[str, int]:
        return {"adults": self.capacity_adults, "children": self.capacity_children}

    @property
    def size(self) -> dict[str, Any] | None:
        if self.size_value is None:
            return None
        return {"value": self.size_value, "unit": self.size_unit}


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("check_in < check_out", name="check_in_before_check_out"),
        CheckConstraint("guests_adults >= 1", name="guests_adults_min"),
        CheckConstraint("guests_children >= 0", name="guests_children_min"),
        CheckConstraint("total_amount >= 0", name="total_amount_non_negative"),
        CheckConstraint(_in("status", BookingStatus), name="status_valid"),
        CheckConstraint(_in("payment_status", PaymentStatus), name="payment_status_valid"),
        Index("ix_bookings_room_dates", "room_id", "check_in", "check_out"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    hotel_id: Mapped[int] = mapped_column(ForeignKey("hotels.id", ondelete="CASCADE"), index=True)
    room_id: Mapped[int] = mapped_column(ForeignKey("rooms.id", ondelete="CASCADE"))
    check_in: Mapped[date] = mapped_column(Date)
    check_out: Mapped[date] = mapped_column(Date)
    guests_adults: Mapped[int]
    guests_children: Mapped[int] = mapped_column(default=0)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    status: Mapped[str] = mapped_column(String(20), default=BookingStatus.PENDING.value, index=True)
    payment_status: Mapped[str] = mapped_column(String(20), default=PaymentStatus.PENDING.value)
    payment_method: Mapped[str | None] = mapped_column(String(20))
    special_requests: Mapped[str | None] = mapped_column(Text)
    cancellation_reason: Mapped[str | None] = mapped_column(Text)
    ai_summary: Mapped[str | None] = mapped_column(Text)
    version: Mapped[int] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=_utcnow
    )

    __mapper_args__ = {"eager_defaults": True, "version_id_col": version}

    customer: Mapped["User"] = relationship()
    hotel: Mapped["Hotel"] = relationship(back_populates="bookings")
    room: Mapped["Room"] = relationship(back_populates="bookings")
    review: Mapped[Optional["Review"]] = relationship(
        back_populates="booking", cascade="all, delete-orphan", uselist=False
    )

    @property
    def guests(self) -> dict[str, int]:
        return {"adults": self.guests_adults, "children": self.guests_children}

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    @property
    def is_holding(self) -> bool:
        return self.status in HOLDING_STATUSES


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("overall >= 1 AND overall <= 5", name="overall_range"),
        CheckConstraint("cleanliness >= 1 AND cleanliness <= 5", name="cleanliness_range"),
        CheckConstraint("service >= 1 AND service <= 5", name="service_range"),
        CheckConstraint("value >= 1 AND value <= 5", name="value_range"),
        CheckConstraint("location >= 1 AND location <= 5", name="location_range"),
    )
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    hotel_id: Mapped[int] = mapped_column(ForeignKey("hotels.id", ondelete="CASCADE"), index=True)
    booking_id: Mapped[int] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"), unique=True
    )
    overall: Mapped[int] = mapped_column(index=True)
    cleanliness: Mapped[int | None]
    service: Mapped[int | None]
    value: Mapped[int | None]
    location: Mapped[int | None]
    comment: Mapped[str] = mapped_column(Text)
    response_text: Mapped[str | None] = mapped_column(Text)
    response_tone: Mapped[str | None] = mapped_column(String(20))
    response_generated_by_ai: Mapped[bool] = mapped_column(Boolean, default=False)
    responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    sentiment: Mapped[str | None] = mapped_column(String(10))
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=_utcnow
    )

    customer: Mapped["User"] = relationship()
    hotel: Mapped["Hotel"] = relationship(back_populates="reviews")
    booking: Mapped["Booking"] = relationship(back_populates="review")

    @property
    def rating(self) -> dict[str, int | None]:
        return {
            "overall": self.overall,
            "cleanliness": self.cleanliness,
            "service": self.service,
            "value": self.value,
            "location": self.location,
        }

    @property
    def owner_response(self) -> dict[str, Any] | None:
        if self.response_text is None:
            return None
        return {
            "text": self.response_text,
            "tone": self.response_tone,
            "generated_by_ai": self.response_generated_by_ai,
            "responded_at": self.responded_at,
        }


class ChatMessage(Base):
    __tablename__ = "chat_messages"
    __table_args__ = (
        CheckConstraint(_in("sender", ChatSender), name="sender_valid"),
        Index("ix_chat_messages_user_created", "user_id", "created_at"),
    )
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    # NULL hotel means the general support channel
    hotel_id: Mapped[int | None] = mapped_column(
        ForeignKey("hotels.id", ondelete="SET NULL"), index=True
    )
    booking_id: Mapped[int | None] = mapped_column(ForeignKey("bookings.id", ondelete="SET NULL"))
    message: Mapped[str] = mapped_column(Text)
    sender: Mapped[str] = mapped_column(String(10))
    is_ai: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=_utcnow
    )
