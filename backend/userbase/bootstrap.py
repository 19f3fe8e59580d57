"""Application Context - the objects built once at startup and passed down by reference.

Invariants:
    - Exactly one DatabaseSessionManager per AppContext
    - Nothing below main.create_app reads settings or the store client from a global

Design Decisions:
    - Plain dataclass over a DI container: two collaborators do not need a registry
    - Pool sizing only applies to server databases; SQLite engines reject those options
"""

from dataclasses import dataclass

from userbase.config import Settings, get_settings
from userbase.infrastructure.database import DatabaseSessionManager


@dataclass
class AppContext:
    settings: Settings
    db: DatabaseSessionManager


def build_context(settings: Settings | None = None) -> AppContext:
    settings = settings or get_settings()
    engine_kwargs = {}
    if not settings.uses_sqlite:
        engine_kwargs = {
            "pool_size": settings.database_pool_size,
            "max_overflow": settings.database_max_overflow,
            "pool_recycle": 3600,
        }
    db = DatabaseSessionManager(settings.database_url, **engine_kwargs)
    return AppContext(settings=settings, db=db)
