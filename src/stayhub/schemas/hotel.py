"""Hotel request and response schemas.

Location, rating and media are exposed nested; the model reassembles them
from flat columns through read-only properties.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from stayhub.models import HotelCategory
from stayhub.schemas.pagination import PaginatedResponse
from stayhub.schemas.user import UserSummary


class Coordinates(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class Location(BaseModel):
    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    coordinates: Coordinates | None = None


class LocationPatch(BaseModel):
    address: str | None = Field(None, min_length=1, max_length=255)
    city: str | None = Field(None, min_length=1, max_length=100)
    state: str | None = Field(None, min_length=1, max_length=100)
    country: str | None = Field(None, min_length=1, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    coordinates: Coordinates | None = None


class Media(BaseModel):
    """An already-hosted asset."""

    url: str
    public_id: str | None = None


class Rating(BaseModel):
    average: float
    count: int


class HotelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    category: HotelCategory
    location: Location
    images: list[Media] = []
    videos: list[Media] = []
    amenities: list[str] = []
    policies: dict[str, Any] | None = None
    contact: dict[str, Any] | None = None


class HotelUpdate(BaseModel):
    """Partial update. Approval and rating are not client-settable."""

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1)
    category: HotelCategory | None = None
    location: LocationPatch | None = None
    images: list[Media] | None = None
    videos: list[Media] | None = None
    amenities: list[str] | None = None
    policies: dict[str, Any] | None = None
    contact: dict[str, Any] | None = None
    is_active: bool | None = None


class HotelSummary(BaseModel):
    """Hotel details nested in room and booking responses."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    category: str
    location: Location


class HotelResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    owner_id: int
    owner: UserSummary
    name: str
    description: str
    category: str
    location: Location
    images: list[Media]
    videos: list[Media]
    amenities: list[str]
    policies: dict[str, Any] | None
    contact: dict[str, Any] | None
    rating: Rating
    is_approved: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime


class HotelListResponse(PaginatedResponse[HotelResponse]):
    """Paginated list of public hotels."""
