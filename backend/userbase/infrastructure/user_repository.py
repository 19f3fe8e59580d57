"""User Repository - the only component that reads or writes the `users` table.

Invariants:
    - Lookups return None for absence; store failures raise StorageError
    - create() re-reads the canonical stored row via RETURNING and fails with
      StorageError(UNKNOWN) when the store returns no row
    - Malformed rows are rejected (MalformedRowError -> StorageError(UNKNOWN)), never coerced
    - Only whitelisted columns (core.user.LOOKUP_FIELDS) can be used for lookups

Design Decisions:
    - Core select/insert over ORM instances: rows come back as mappings, the same
      shape user_from_row validates (ADR: one mapping function for every read path)
    - One session per call: repositories hold no session state between requests
"""

import logging
import uuid
from typing import Any

from sqlalchemy import Select, insert, select

from userbase.core.errors import StorageError, StorageErrorKind
from userbase.core.user import (
    LOOKUP_FIELDS, MalformedRowError, NewUser, User, UserLookupField,
    user_from_row,
)
from userbase.infrastructure.database import DatabaseSessionManager
from userbase.models.user import UserRecord, utcnow

logger = logging.getLogger(__name__)

_users = UserRecord.__table__


class SqlAlchemyUserRepository:
    """UserRepository backed by SQLAlchemy asyncio."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def find_by_id(self, user_id: str) -> User | None:
        return await self.find_by_field("id", user_id)

    async def find_by_field(
        self, field: UserLookupField, value: str,
    ) -> User | None:
        if field not in LOOKUP_FIELDS:
            raise ValueError(f"Unsupported lookup field: {field}")
        key: Any = value
        if field == "id":
            try:
                key = uuid.UUID(value)
            except (TypeError, ValueError, AttributeError):
                # Not a UUID, so no such row can exist
                return None
        query = select(*_users.c).where(_users.c[field] == key)
        return await self._fetch_one(query, f"find_by_{field}")

    async def create(self, data: NewUser) -> User:
        now = utcnow()
        statement = (
            insert(_users)
            .values(
                id=uuid.uuid4(),
                email=data.email,
                username=data.username,
                password_hash=data.password_hash,
                created_at=now,
                updated_at=now,
            )
            .returning(*_users.c)
        )
        async with self._db.session("create_user") as db:
            result = await db.execute(statement)
            row = result.mappings().one_or_none()
            if row is None:
                await db.rollback()
                raise StorageError(
                    StorageErrorKind.UNKNOWN,
                    "User creation failed: no row returned from database",
                    "create_user",
                )
            await db.commit()
        user = self._to_domain(row, "create_user")
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def _fetch_one(self, query: Select, operation: str) -> User | None:
        async with self._db.session(operation) as db:
            result = await db.execute(query)
            # maybe-single: zero rows is absence, more than one is a store error
            row = result.mappings().one_or_none()
        if row is None:
            return None
        return self._to_domain(row, operation)

    @staticmethod
    def _to_domain(row, operation: str) -> User:
        try:
            return user_from_row(row)
        except MalformedRowError as e:
            logger.error(f"Malformed user row during {operation}: {e}")
            raise StorageError(
                StorageErrorKind.UNKNOWN,
                "Failed to map stored user row", operation,
            ) from e
