"""Root conftest - shared test configuration and database fixtures.

Invariants:
    - Every test that asks for a database gets a fresh in-memory SQLite schema
    - Tests never reach a real PostgreSQL server

Design Decisions:
    - SQLite in-memory + StaticPool: one shared connection so every session sees the
      same tables (PostgreSQL-specific behavior is covered by classify_integrity_error tests)
"""

import os

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

# Never pick up a developer's real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

from userbase.db.base import Base  # noqa: E402
import userbase.models  # noqa: E402,F401
from userbase.infrastructure.database import DatabaseSessionManager  # noqa: E402


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
async def db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
async def unreachable_db(tmp_path):
    """A manager whose database file lives in a directory that does not exist."""
    missing = tmp_path / "missing" / "userbase.db"
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{missing}")
    yield manager
    await manager.dispose()
