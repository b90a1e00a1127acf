import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from stayhub.db.session import Base, commit, get_db
from stayhub.dependencies import (
    get_chat_hub,
    get_geocoder,
    get_llm_client,
    get_mailer,
    get_media_host,
)
from stayhub.main import app
from stayhub.services.chat import ChatHub
from tests.fakes import FakeGenerator, FakeMailer, RecordingMediaHost

# Pytest only picks up fixtures from conftest.py files. Fixtures defined in other
# modules (like tests/seeds.py) are invisible unless we register them here.
pytest_plugins = ["tests.seeds"]

# Point at a Postgres database to exercise row locks; SQLite keeps the suite serverless.
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///./stayhub_test.db")

engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)
async_session = async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db() -> AsyncIterator[AsyncSession]:
    """Create tables and yield a session, then drop tables after test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def other_db(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """A second session on the same database, for interleaving two writers."""
    async with async_session() as session:
        yield session


@pytest.fixture
def llm() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def outbox() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def media_host() -> RecordingMediaHost:
    return RecordingMediaHost()


@pytest.fixture
def chat_hub() -> ChatHub:
    return ChatHub()


@pytest_asyncio.fixture
async def client(
    db: AsyncSession,
    llm: FakeGenerator,
    outbox: FakeMailer,
    media_host: RecordingMediaHost,
    chat_hub: ChatHub,
) -> AsyncIterator[AsyncClient]:
    """HTTP client on the test session, with every external collaborator faked."""

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        # Requests share the test session; committing runs after-commit hooks as in production
        yield db
        await commit(db)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_llm_client] = lambda: llm
    app.dependency_overrides[get_mailer] = lambda: outbox
    app.dependency_overrides[get_geocoder] = lambda: None
    app.dependency_overrides[get_media_host] = lambda: media_host
    app.dependency_overrides[get_chat_hub] = lambda: chat_hub

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
