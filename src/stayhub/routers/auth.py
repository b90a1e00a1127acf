"""Authentication and profile endpoints."""

from fastapi import APIRouter

from stayhub.dependencies import DB, CurrentUser, MailerDep
from stayhub.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    OAuthCallbackRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from stayhub.schemas.user import ProfileUpdate, UserResponse
from stayhub.services import auth

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(payload: RegisterRequest, db: DB) -> AuthResponse:
    """Create an account. Hotel owners start pending admin approval."""
    result = await auth.register(
        db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )
    return AuthResponse.model_validate(result)


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, db: DB) -> AuthResponse:
    result = await auth.authenticate(db, email=payload.email, password=payload.password)
    return AuthResponse.model_validate(result)


@router.post("/oauth/callback", response_model=AuthResponse)
async def oauth_callback(payload: OAuthCallbackRequest, db: DB) -> AuthResponse:
    result = await auth.oauth_login(
        db,
        provider=payload.provider,
        oauth_id=payload.oauth_id,
        email=payload.email,
        name=payload.name,
        profile_image=payload.profile_image,
    )
    return AuthResponse.model_validate(result)


@router.post("/forgotpassword", response_model=MessageResponse)
async def forgot_password(
    payload: ForgotPasswordRequest, db: DB, mailer: MailerDep
) -> MessageResponse:
    """Always reports success for unknown emails so accounts cannot be enumerated."""
    await auth.forgot_password(db, mailer, email=payload.email)
    return MessageResponse(message="If that email is registered, a reset link has been sent")


@router.patch("/resetpassword/{resettoken}", response_model=MessageResponse)
async def reset_password(
    resettoken: str, payload: ResetPasswordRequest, db: DB
) -> MessageResponse:
    await auth.reset_password(db, token=resettoken, password=payload.password)
    return MessageResponse(message="Password reset successful")


@router.post("/logout", response_model=MessageResponse)
async def logout(user: CurrentUser) -> MessageResponse:
    """Tokens are stateless; the client discards its copy."""
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
async def me(user: CurrentUser) -> UserResponse:
    return UserResponse.model_validate(user)


@router.put("/profile", response_model=UserResponse)
async def update_profile(payload: ProfileUpdate, user: CurrentUser, db: DB) -> UserResponse:
    updated = await auth.update_profile(db, user, payload.model_dump(exclude_unset=True))
    return UserResponse.model_validate(updated)
