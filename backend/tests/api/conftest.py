"""API test fixtures - application wired to the in-memory test database.

Invariants:
    - The app under test is built by create_app from an explicit AppContext
    - HTTP calls go through httpx ASGITransport (no sockets, no lifespan)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from userbase.bootstrap import AppContext
from userbase.config import Settings
from userbase.main import create_app


def make_settings(**overrides) -> Settings:
    values = {
        "environment": "test",
        "database_url": "sqlite+aiosqlite:///:memory:",
        "log_format": "text",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def build_app(db_manager):
    """Factory for apps with overridden settings (e.g. environment='production')."""
    def _build(**overrides):
        return create_app(
            AppContext(settings=make_settings(**overrides), db=db_manager),
        )
    return _build


@pytest.fixture
def app(build_app):
    return build_app()


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def unreachable_client(unreachable_db):
    app = create_app(AppContext(settings=make_settings(), db=unreachable_db))
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
