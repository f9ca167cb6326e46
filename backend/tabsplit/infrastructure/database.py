"""Snapshot Database — async engine and per-request sessions for the snapshot store.

Invariants:
    - A failed request never leaves a half-written snapshot: sessions roll back on error
    - Driver and ORM failures surface as StoreError (503), never as raw SQLAlchemy errors
    - A store used before init_db() is a StoreError, same as an unreachable database

Design Decisions:
    - One process-wide manager created in the FastAPI lifespan, not at import time
    - expire_on_commit=False: snapshots are read back after commit without a reload
    - SQLite (dev/tests) keeps its default pool; pool sizing applies to Postgres only
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from tabsplit.core.errors import StoreError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_FAILURE_KINDS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Snapshot violates a table constraint", "commit"),
    (OperationalError, "Snapshot database unreachable", "connect"),
    (DBAPIError, "Snapshot database rejected the statement", "execute"),
    (SQLAlchemyError, "Snapshot store operation failed", "session"),
)


def _to_store_error(exc: SQLAlchemyError) -> StoreError:
    for kind, message, operation in _FAILURE_KINDS:
        if isinstance(exc, kind):
            return StoreError(message, operation)
    return StoreError("Snapshot store operation failed", "session")


class DatabaseSessionManager:
    """Engine plus session factory for the expense snapshot table."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        pool_options = {} if database_url.startswith("sqlite") else {
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_recycle": 3600,
        }
        self.engine = create_async_engine(
            database_url, pool_pre_ping=True, **pool_options,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = _to_store_error(e)
            logger.error(
                "Snapshot store %s failed: %s", error.operation, type(e).__name__,
                extra={"error_code": error.code},
            )
            raise error from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except StoreError:
            return False


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise StoreError("Snapshot database not initialized", "connect")
    async with db_manager.session() as session:
        yield session
