"""Room request and response schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from stayhub.models import BedType, RoomType, SizeUnit
from stayhub.schemas.hotel import HotelSummary, Media
from stayhub.schemas.pagination import PaginatedResponse


class Price(BaseModel):
    base: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    currency: str = Field("USD", min_length=3, max_length=3)


class Capacity(BaseModel):
    adults: int = Field(2, ge=1)
    children: int = Field(0, ge=0)


class Size(BaseModel):
    value: float = Field(..., gt=0)
    unit: SizeUnit = SizeUnit.SQFT


class RoomCreate(BaseModel):
    hotel_id: int
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    type: RoomType
    price: Price
    capacity: Capacity = Capacity()
    size: Size | None = None
    bed_type: BedType | None = None
    images: list[Media] = []
    amenities: list[str] = []
    quantity: int = Field(1, ge=1)
    # Defaults to quantity
    available: int | None = Field(None, ge=0)


class RoomUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1)
    type: RoomType | None = None
    price: Price | None = None
    capacity: Capacity | None = None
    size: Size | None = None
    bed_type: BedType | None = None
    images: list[Media] | None = None
    amenities: list[str] | None = None
    quantity: int | None = Field(None, ge=1)
    is_active: bool | None = None


class RoomSummary(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    type: str


class RoomResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    hotel_id: int
    hotel: HotelSummary
    name: str
    description: str
    type: str
    price: Price
    capacity: Capacity
    size: Size | None
    bed_type: str | None
    images: list[Media]
    amenities: list[str]
    quantity: int
    available: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class RoomListResponse(PaginatedResponse[RoomResponse]):
    """Paginated list of active rooms."""
