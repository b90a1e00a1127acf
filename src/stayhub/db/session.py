from collections.abc import AsyncGenerator, AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from stayhub.config import settings

# Naming conventions for database constraints.
# Without these, Alembic can't autogenerate consistent constraint names across migrations.
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",  # Index
    "uq": "uq_%(table_name)s_%(column_0_name)s",  # Unique constraint
    "ck": "ck_%(table_name)s_%(constraint_name)s",  # Check constraint
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",  # Foreign key
    "pk": "pk_%(table_name)s",  # Primary key
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    The naming_convention ensures all constraints have predictable names,
    which is critical for Alembic migrations to work correctly.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def _connect_args(url: str) -> dict[str, Any]:
    # asyncpg-only option; other drivers reject unknown connect kwargs
    if "+asyncpg" in url:
        return {"command_timeout": settings.db_statement_timeout}
    return {}


# Async engine with connection pooling.
engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_timeout=settings.db_pool_timeout,
    pool_recycle=settings.db_pool_recycle,
    pool_pre_ping=settings.db_pool_pre_ping,
    echo=settings.db_echo,
    connect_args=_connect_args(settings.database_url),
)

# expire_on_commit=False keeps objects usable after commit without re-querying.
# Accessing expired attributes in async code would trigger implicit sync I/O.
async_session = async_sessionmaker(engine, expire_on_commit=False)

# Session.info key holding callbacks that must only run once the transaction is durable.
AFTER_COMMIT = "after_commit"


def call_after_commit(session: AsyncSession, callback: Callable[[], None]) -> None:
    """Run ``callback`` after the session's next successful commit.

    Used for side effects outside the database (deleting hosted media) that
    must not happen if the transaction is rolled back.
    """
    session.info.setdefault(AFTER_COMMIT, []).append(callback)


async def commit(session: AsyncSession) -> None:
    await session.commit()
    for callback in session.info.pop(AFTER_COMMIT, []):
        callback()


async def rollback(session: AsyncSession) -> None:
    session.info.pop(AFTER_COMMIT, None)
    await session.rollback()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides a database session per request.

    Commits on success, rolls back on exception. This is the single place where
    transaction boundaries are managed for HTTP requests; services and
    repositories never call commit() or rollback() directly.
    """
    async with async_session() as session:
        try:
            yield session
            await commit(session)
        except Exception:
            await rollback(session)
            raise


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Transaction scope for callers outside the request cycle (websocket handlers).

    Same contract as get_db(): commit on clean exit, rollback on error.
    """
    async with async_session() as session:
        try:
            yield session
            await commit(session)
        except Exception:
            await rollback(session)
            raise


async def shutdown() -> None:
    """Close all pooled database connections on application shutdown."""
    await engine.dispose()
