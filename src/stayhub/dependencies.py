"""Shared FastAPI dependencies.

Reusable type aliases and dependency functions that routers import.
Defined here (not in main.py) to avoid circular imports when routers
are registered in main.

External collaborators are provided through dependency functions so tests
can swap them with ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.db.session import get_db
from stayhub.exceptions import ApprovalPendingError, AuthenticationError
from stayhub.models import User
from stayhub.repositories.user import get_user
from stayhub.security import decode_access_token
from stayhub.services.chat import ChatHub, hub
from stayhub.services.geocoding import Geocoder, build_geocoder
from stayhub.services.llm_client import TextGenerator, llm_client
from stayhub.services.mailer import Mailer, mailer
from stayhub.services.media_host import MediaHost, build_media_host

DB = Annotated[AsyncSession, Depends(get_db)]

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    db: DB,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> User:
    """Resolve the bearer token to an account. Any failure is a 401."""
    if credentials is None:
        raise AuthenticationError("Not authorized to access this route")
    user = await get_user(db, decode_access_token(credentials.credentials))
    if user is None:
        raise AuthenticationError("User not found")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def get_approved_user(user: CurrentUser) -> User:
    """Unapproved hotel owners may sign in but not use the platform yet."""
    if user.approval_pending:
        raise ApprovalPendingError()
    return user


ApprovedUser = Annotated[User, Depends(get_approved_user)]


def get_llm_client() -> TextGenerator:
    return llm_client


def get_mailer() -> Mailer:
    return mailer


def get_geocoder() -> Geocoder | None:
    return build_geocoder()


def get_media_host() -> MediaHost:
    return build_media_host()


def get_chat_hub() -> ChatHub:
    return hub


LLM = Annotated[TextGenerator, Depends(get_llm_client)]
MailerDep = Annotated[Mailer, Depends(get_mailer)]
GeocoderDep = Annotated[Geocoder | None, Depends(get_geocoder)]
MediaHostDep = Annotated[MediaHost, Depends(get_media_host)]
Hub = Annotated[ChatHub, Depends(get_chat_hub)]
