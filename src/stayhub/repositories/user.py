"""User data-access layer.

Pure query functions. No business logic or HTTP concerns.
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models import Role, User


@dataclass(frozen=True)
class UserFilter:
    """Optional filters for the admin user list. Unset fields do not filter."""

    role: Role | None = None
    is_approved: bool | None = None
    search: str | None = None

    def clauses(self) -> list[ColumnElement[bool]]:
        clauses: list[ColumnElement[bool]] = []
        if self.role is not None:
            clauses.append(User.role == self.role.value)
        if self.is_approved is not None:
            clauses.append(User.is_approved == self.is_approved)
        if self.search:
            pattern = f"%{self.search.lower()}%"
            clauses.append(or_(func.lower(User.name).like(pattern), User.email.like(pattern)))
        return clauses


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Look up by an already-normalized (lower-cased, trimmed) email."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_oauth(db: AsyncSession, provider: str, oauth_id: str) -> User | None:
    stmt = select(User).where(User.oauth_provider == provider, User.oauth_id == oauth_id)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_user_by_reset_token(db: AsyncSession, token_hash: str, now: datetime) -> User | None:
    """Return the user holding an unexpired reset token with this hash."""
    stmt = select(User).where(
        User.reset_password_token == token_hash,
        User.reset_password_expire > now,
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def list_users(db: AsyncSession, filters: UserFilter, skip: int, limit: int) -> list[User]:
    stmt = (
        select(User)
        .where(*filters.clauses())
        .order_by(User.created_at.desc(), User.id.desc())
        .offset(skip)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_users(db: AsyncSession, filters: UserFilter | None = None) -> int:
    stmt = select(func.count(User.id))
    if filters is not None:
        stmt = stmt.where(*filters.clauses())
    result = await db.execute(stmt)
    return result.scalar_one()


async def count_users_by_role(db: AsyncSession) -> dict[str, int]:
    stmt = select(User.role, func.count(User.id)).group_by(User.role)
    result = await db.execute(stmt)
    return {row[0]: row[1] for row in result.all()}


async def list_pending_owners(db: AsyncSession) -> list[User]:
    stmt = (
        select(User)
        .where(User.role == Role.HOTEL_OWNER.value, User.is_approved.is_(False))
        .order_by(User.created_at, User.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())
