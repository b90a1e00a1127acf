"""Account registration, login, OAuth linking and password reset.

Hotel owners are created unapproved. They can still log in; the result is
flagged ``approval_pending`` so the client can show a waiting page, and the
ApprovedUser dependency keeps them out of full-access endpoints.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.config import settings
from stayhub.exceptions import (
    EmailDeliveryFailedError,
    EmailTakenError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    OAuthAccountNoPasswordError,
    ValidationFailedError,
)
from stayhub.logging import get_logger
from stayhub.models import OAuthProvider, Role, User
from stayhub.repositories.user import (
    get_user_by_email,
    get_user_by_oauth,
    get_user_by_reset_token,
)
from stayhub.security import (
    create_access_token,
    generate_reset_token,
    hash_password,
    hash_reset_token,
    verify_password,
)
from stayhub.services.mailer import Mailer

logger = get_logger(__name__)

PENDING_APPROVAL_MESSAGE = "Your account is pending admin approval."
REGISTERED_PENDING_MESSAGE = (
    "Account created successfully. Your account is pending admin approval. "
    "You will be notified once approved."
)

PROFILE_FIELDS = ("name", "phone", "profile_image")
ADDRESS_FIELDS = ("street", "city", "state", "zip_code", "country")


@dataclass
class AuthResult:
    token: str
    user: User
    approval_pending: bool
    message: str | None = None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def parse_role(role: str | None) -> Role:
    """Unknown or missing roles fall back to customer."""
    try:
        return Role(role) if role else Role.CUSTOMER
    except ValueError:
        return Role.CUSTOMER


def _issue(user: User, message: str | None = None) -> AuthResult:
    pending = user.approval_pending
    if pending and message is None:
        message = PENDING_APPROVAL_MESSAGE
    return AuthResult(
        token=create_access_token(user.id),
        user=user,
        approval_pending=pending,
        message=message,
    )


async def _flush_new_account(db: AsyncSession, user: User) -> None:
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as exc:
        # Lost a race against a concurrent registration with the same email
        raise EmailTakenError() from exc


async def register(
    db: AsyncSession, *, name: str, email: str, password: str, role: str | None = None
) -> AuthResult:
    email = normalize_email(email)
    if await get_user_by_email(db, email) is not None:
        raise EmailTakenError()

    user = User.new_account(
        parse_role(role),
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
    )
    await _flush_new_account(db, user)
    logger.info("user_registered", user_id=user.id, role=user.role)

    message = REGISTERED_PENDING_MESSAGE if user.approval_pending else None
    return _issue(user, message)


async def authenticate(db: AsyncSession, *, email: str, password: str) -> AuthResult:
    user = await get_user_by_email(db, normalize_email(email))
    if user is None or not verify_password(password, user.password_hash):
        logger.info("login_failed")
        raise InvalidCredentialsError()

    logger.info("user_logged_in", user_id=user.id, approval_pending=user.approval_pending)
    return _issue(user)


async def oauth_login(
    db: AsyncSession,
    *,
    provider: str,
    oauth_id: str,
    email: str,
    name: str,
    profile_image: str | None = None,
) -> AuthResult:
    """Find-or-link-or-create an account for an OAuth identity.

    New accounts are always customers: OAuth sign-up cannot request an
    elevated role.
    """
    try:
        provider = OAuthProvider(provider).value
    except ValueError as exc:
        raise ValidationFailedError("Invalid OAuth provider") from exc

    user = await get_user_by_oauth(db, provider, oauth_id)
    if user is None:
        user = await get_user_by_email(db, normalize_email(email))
        if user is not None:
            user.oauth_provider = provider
            user.oauth_id = oauth_id
            user.is_verified = True
            if profile_image and not user.profile_image:
                user.profile_image = profile_image
            await db.flush()
            logger.info("oauth_linked", user_id=user.id, provider=provider)

    if user is None:
        user = User.new_account(
            Role.CUSTOMER,
            name=name.strip(),
            email=normalize_email(email),
            oauth_provider=provider,
            oauth_id=oauth_id,
            profile_image=profile_image,
            is_verified=True,
        )
        await _flush_new_account(db, user)
        logger.info("oauth_registered", user_id=user.id, provider=provider)

    return _issue(user)


def _reset_email(reset_url: str) -> tuple[str, str]:
    text = (
        "You are receiving this email because you (or someone else) has requested "
        "the reset of a password.\n\n"
        f"Please open the following link to reset your password:\n\n{reset_url}\n\n"
        "If you did not request this, please ignore this email and your password "
        f"will remain unchanged.\nThis link will expire in "
        f"{settings.password_reset_expire_minutes} minutes."
    )
    html = (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        "<h2>Password Reset Request</h2>"
        "<p>You are receiving this email because you (or someone else) has requested "
        "the reset of a password.</p>"
        f'<p><a href="{reset_url}">Reset Password</a></p>'
        f"<p>Or copy and paste this link into your browser:<br>{reset_url}</p>"
        "<p>If you did not request this, please ignore this email. "
        f"This link will expire in {settings.password_reset_expire_minutes} minutes.</p>"
        "</div>"
    )
    return text, html


async def forgot_password(db: AsyncSession, mailer: Mailer, *, email: str) -> None:
    """Email a reset link. Unknown addresses succeed silently."""
    user = await get_user_by_email(db, normalize_email(email))
    if user is None:
        logger.info("password_reset_unknown_email")
        return
    if user.oauth_provider:
        raise OAuthAccountNoPasswordError()

    raw_token, token_hash = generate_reset_token()
    user.reset_password_token = token_hash
    user.reset_password_expire = datetime.now(UTC) + timedelta(
        minutes=settings.password_reset_expire_minutes
    )
    await db.flush()

    text, html = _reset_email(f"{settings.frontend_url}/reset-password/{raw_token}")
    try:
        await mailer.send(to=user.email, subject="Password Reset Request", text=text, html=html)
    except EmailDeliveryFailedError:
        user.reset_password_token = None
        user.reset_password_expire = None
        await db.flush()
        raise
    logger.info("password_reset_requested", user_id=user.id)


async def reset_password(db: AsyncSession, *, token: str, password: str) -> None:
    user = await get_user_by_reset_token(db, hash_reset_token(token), datetime.now(UTC))
    if user is None:
        raise InvalidOrExpiredTokenError()

    user.password_hash = hash_password(password)
    user.reset_password_token = None
    user.reset_password_expire = None
    await db.flush()
    logger.info("password_reset_completed", user_id=user.id)


async def update_profile(db: AsyncSession, user: User, changes: dict[str, Any]) -> User:
    """Apply profile changes. Email, role and approval are not editable here."""
    for field in PROFILE_FIELDS:
        if field in changes:
            setattr(user, field, changes[field])
    address = changes.get("address")
    if address is not None:
        for field in ADDRESS_FIELDS:
            if field in address:
                setattr(user, field, address[field])
    await db.flush()
    return user
