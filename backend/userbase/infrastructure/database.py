"""Database Session Manager - the store client shared by every repository.

Invariants:
    - One instance per process, built in bootstrap.build_context and passed by reference
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Every SQLAlchemy or connection failure leaves this module as a StorageError
    - Unique-constraint conflicts are classified from the driver's error code, never from SQL text

Design Decisions:
    - No module-level singleton: repositories receive the manager through their constructor
      (ADR: explicit composition over ambient lookup)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - from_engine(): tests hand in an in-memory SQLite engine without touching pool options
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from userbase.core.errors import StorageError, StorageErrorKind

logger = logging.getLogger(__name__)

PG_UNIQUE_VIOLATION = "23505"
SQLITE_CONSTRAINT_UNIQUE = 2067


def classify_integrity_error(exc: IntegrityError) -> StorageErrorKind:
    """Map a driver-level integrity error to a StorageErrorKind."""
    orig = exc.orig
    # asyncpg (through SQLAlchemy's adapter) exposes sqlstate and pgcode
    if PG_UNIQUE_VIOLATION in (
        getattr(orig, "sqlstate", None), getattr(orig, "pgcode", None),
    ):
        return StorageErrorKind.UNIQUE_VIOLATION
    if getattr(orig, "sqlite_errorcode", None) == SQLITE_CONSTRAINT_UNIQUE:
        return StorageErrorKind.UNIQUE_VIOLATION
    return StorageErrorKind.UNKNOWN


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(self, database_url: str, **engine_kwargs):
        engine = create_async_engine(
            database_url, pool_pre_ping=True, **engine_kwargs,
        )
        self._bind(engine)

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        manager = cls.__new__(cls)
        manager._bind(engine)
        return manager

    def _bind(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(
        self, operation: str = "query",
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback; store failures become StorageError."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            kind = classify_integrity_error(e)
            logger.error(
                f"DB integrity error during {operation}: {e.orig}",
                extra={"error_kind": kind.value},
            )
            raise StorageError(
                kind, "Integrity constraint violated", operation,
            ) from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error during {operation}: {e}")
            raise StorageError(
                StorageErrorKind.UNKNOWN,
                "Connection or operational error", operation,
            ) from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error during {operation}: {e}")
            raise StorageError(
                StorageErrorKind.UNKNOWN, "Database driver error", operation,
            ) from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error during {operation}: {e}")
            raise StorageError(
                StorageErrorKind.UNKNOWN, "Database operation failed", operation,
            ) from e
        except OSError as e:
            # asyncpg raises plain OSError subclasses when the server is unreachable
            logger.error(f"DB connection failed during {operation}: {e}")
            raise StorageError(
                StorageErrorKind.UNKNOWN, "Database unreachable", operation,
            ) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for GET /health)."""
        try:
            async with self.session("health_check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
