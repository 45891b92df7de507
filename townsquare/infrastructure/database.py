"""Database — async engine, request sessions, and dialect-aware INSERT.

Invariants:
    - A session that exits with an exception is rolled back before it is closed
    - SQLAlchemy failures escaping a request session surface as StoreError;
      TownsquareErrors raised by services pass through untouched
    - IntegrityErrors the services expect (comment sequence races) are caught
      inside the service and never reach this layer

Design Decisions:
    - One DatabaseSessionManager per process, created in the FastAPI lifespan
    - expire_on_commit=False so committed rows stay readable without lazy IO
    - dialect_insert returns the PostgreSQL or SQLite construct, the two that
      support ON CONFLICT upserts as a single atomic statement
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from townsquare.core.errors import StoreError

logger = logging.getLogger(__name__)

UPSERT_DIALECTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


class DatabaseSessionManager:
    """Owns the engine and hands out request-scoped AsyncSessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            operation = "connect" if isinstance(e, OperationalError) else "execute"
            logger.error(f"Store {operation} failed: {e}")
            raise StoreError(type(e).__name__, operation) from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (StoreError, OSError) as e:
            logger.warning(f"Readiness check failed: {e}")
            return False


def dialect_insert(db: AsyncSession, table):
    """INSERT construct supporting on_conflict_* for the session's dialect."""
    dialect = db.get_bind().dialect.name
    if dialect not in UPSERT_DIALECTS:
        raise StoreError(f"unsupported dialect '{dialect}'", "insert")
    return UPSERT_DIALECTS[dialect](table)


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
