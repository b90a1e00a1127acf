"""User and profile schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class Address(BaseModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class UserResponse(BaseModel):
    """Account as returned to its owner and to admins. Never carries secrets."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    role: str
    is_approved: bool
    is_verified: bool
    oauth_provider: str | None
    profile_image: str | None
    phone: str | None
    address: Address | None
    created_at: datetime


class UserSummary(BaseModel):
    """Owner details nested in hotel responses."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str


class ReviewerSummary(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    profile_image: str | None


class ProfileUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=30)
    profile_image: str | None = None
    address: Address | None = None
