"""Authentication request and response schemas."""

from pydantic import BaseModel, EmailStr, Field

from stayhub.models import OAuthProvider
from stayhub.schemas.user import UserResponse


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    # Unknown values fall back to customer in the service
    role: str | None = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class OAuthCallbackRequest(BaseModel):
    """Identity already verified by the provider on the client side."""

    provider: OAuthProvider
    oauth_id: str = Field(..., min_length=1)
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)
    profile_image: str | None = None


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=6)


class AuthResponse(BaseModel):
    """Token plus account, with the approval soft-block surfaced for the client."""

    model_config = {"from_attributes": True}

    token: str
    user: UserResponse
    approval_pending: bool
    message: str | None = None


class MessageResponse(BaseModel):
    message: str
