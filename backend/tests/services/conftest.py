"""Service test fixtures — async SQLite store + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - get_settings overridden so the invite secret is fixed and known
    - Store clock advances one second per call, so insertion order is deterministic

Design Decisions:
    - SQLite in-memory: fast, no external dependency; JSON columns behave the same
    - StaticPool: every session shares the one in-memory connection
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from tabsplit.config import Settings, get_settings
from tabsplit.db.base import Base
import tabsplit.models  # noqa: F401
from tabsplit.infrastructure.database import get_db
from tabsplit.infrastructure.snapshot_store import SqlExpenseSnapshotStore
from tabsplit.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def ticking_clock():
    """Clock that advances one second on every call."""
    state = {"now": datetime(2026, 10, 1, tzinfo=timezone.utc)}

    def tick() -> datetime:
        state["now"] += timedelta(seconds=1)
        return state["now"]
    return tick


@pytest.fixture
async def store(test_db, ticking_clock):
    return SqlExpenseSnapshotStore(test_db, clock=ticking_clock)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        invite_secret="test-invite-secret",
        invite_base_url="https://tabsplit.test",
        database_url="sqlite+aiosqlite:///:memory:",
    )


@pytest.fixture
async def client(test_session_factory, test_settings):
    """FastAPI test client with DB and settings dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
