"""Engine and sessions for the club catalog store.

One ``DatabaseManager`` per process. Sessions are short-lived: one per
request (REST/GraphQL) or per seed run. No locks are held across store
calls; write conflicts are detected through the ``version`` column of the
clubs table.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

logger = logging.getLogger(__name__)


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:  # pragma: no cover
    # Stadium and player rows are removed through ON DELETE CASCADE.
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


class DatabaseManager:
    """Club store connection: engine, session factory and table creation."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self.engine = create_async_engine(database_url, echo=False)
        if database_url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_foreign_keys)
        self._sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)
        logger.info("Club store engine created")

    async def create_schema(self) -> None:
        """Create the clubs, stadiums and players tables if missing."""
        from models import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Club tables ensured")

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Club store engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session that commits on success and rolls back on any error.

        Domain errors raised inside the block propagate unchanged after the
        rollback, so a rejected update never leaves a partial write behind.
        """
        session = self._sessionmaker()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


_db_manager: Optional[DatabaseManager] = None


async def init_database(database_url: str) -> DatabaseManager:
    """Create the process-wide DatabaseManager (reused if already created)."""
    global _db_manager

    if _db_manager is None:
        _db_manager = DatabaseManager(database_url)
    return _db_manager


async def dispose_database() -> None:
    global _db_manager

    if _db_manager is not None:
        await _db_manager.dispose()
        _db_manager = None


def get_database_manager() -> DatabaseManager:
    """Return the DatabaseManager created by ``init_database``."""
    if _db_manager is None:
        raise RuntimeError("DatabaseManager is not initialized.")
    return _db_manager
