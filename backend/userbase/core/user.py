"""User Entity - domain shape of a persisted user and the row mapping into it.

Invariants:
    - id is the string form of the stored UUID and never changes after insert
    - Timestamps are always timezone-aware UTC
    - user_from_row never fills in a missing required column; it raises MalformedRowError
    - password_hash is the only credential field and never leaves the service boundary

Design Decisions:
    - Frozen dataclasses over ORM objects: services and handlers never hold a live
      session-bound instance (ADR: persistence stays behind the repository)
    - UserCreate carries the plaintext password; NewUser carries only the hash,
      so the repository cannot persist a plaintext secret by construction
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal

UserLookupField = Literal["id", "email", "username"]
LOOKUP_FIELDS: frozenset[str] = frozenset({"id", "email", "username"})

REQUIRED_ROW_FIELDS = ("id", "email", "created_at", "updated_at")


class MalformedRowError(ValueError):
    """A store row lacks a column the User entity requires."""


@dataclass(frozen=True)
class User:
    id: str
    email: str
    username: str | None
    password_hash: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class UserCreate:
    """Caller-supplied fields for a new user (server assigns id and timestamps)."""
    email: str
    username: str | None = None
    password: str | None = None


@dataclass(frozen=True)
class NewUser:
    """Insert payload handed to the repository."""
    email: str
    username: str | None = None
    password_hash: str | None = None


def user_from_row(row: Mapping[str, Any]) -> User:
    """Map a store row to a User. Raises MalformedRowError on missing required columns."""
    missing = [name for name in REQUIRED_ROW_FIELDS if row.get(name) is None]
    if missing:
        raise MalformedRowError(
            f"user row missing required field(s): {', '.join(missing)}",
        )
    return User(
        id=str(row["id"]),
        email=row["email"],
        username=row.get("username"),
        password_hash=row.get("password_hash"),
        created_at=_as_utc(row["created_at"]),
        updated_at=_as_utc(row["updated_at"]),
    )


def _as_utc(value: datetime) -> datetime:
    if not isinstance(value, datetime):
        raise MalformedRowError(f"expected datetime, got {type(value).__name__}")
    # SQLite returns naive datetimes for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
