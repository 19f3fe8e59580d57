"""User Service - user use cases: lookup by id and registration.

Invariants:
    - get_by_id rejects malformed ids with INVALID_INPUT before touching the repository
    - get_by_id returns None for unknown ids (absence is not an error)
    - create rejects a taken email with CONFLICT and performs no insert
    - A StorageError never escapes: it becomes ApplicationError(INTERNAL) chained to the cause
    - Plaintext passwords never reach the repository; hashing runs in the default executor

Design Decisions:
    - Pre-check then insert: the lookup gives a precise 409 for the common case; the
      store's unique constraint stays the authority when two creates race
      (ADR: a lost race surfaces as INTERNAL, see DESIGN.md open questions)
    - No transport types here: handlers translate kinds to HTTP
"""

import asyncio
import logging
import uuid
from typing import assert_never

from userbase.core.credentials import hash_password
from userbase.core.errors import (
    ApplicationError, ApplicationErrorKind, StorageError, StorageErrorKind,
)
from userbase.core.repository_protocols import UserRepository
from userbase.core.user import NewUser, User, UserCreate

logger = logging.getLogger(__name__)

INVALID_ID_MESSAGE = "Invalid user ID format provided."
EMAIL_TAKEN_MESSAGE = "User with this email already exists."
CREATE_FAILED_MESSAGE = "Failed to create user due to a database issue."
FETCH_FAILED_MESSAGE = "Failed to fetch user due to a database issue."


def is_valid_user_id(user_id: object) -> bool:
    """User ids are non-empty UUID strings."""
    if not isinstance(user_id, str) or not user_id.strip():
        return False
    try:
        uuid.UUID(user_id)
    except ValueError:
        return False
    return True


class UserService:
    """User use cases. Depends only on the UserRepository Protocol."""

    def __init__(self, repository: UserRepository):
        self._repository = repository

    async def get_by_id(self, user_id: str) -> User | None:
        if not is_valid_user_id(user_id):
            raise ApplicationError(
                ApplicationErrorKind.INVALID_INPUT, INVALID_ID_MESSAGE,
            )
        try:
            return await self._repository.find_by_id(user_id)
        except StorageError as e:
            logger.error(
                f"Database error fetching user {user_id}: {e.message}",
                extra={"error_kind": e.kind.value, "operation": e.operation},
            )
            raise ApplicationError(
                ApplicationErrorKind.INTERNAL, FETCH_FAILED_MESSAGE,
            ) from e

    async def create(self, data: UserCreate) -> User:
        try:
            existing = await self._repository.find_by_field("email", data.email)
        except StorageError as e:
            logger.error(
                f"Database error during email pre-check: {e.message}",
                extra={"error_kind": e.kind.value, "operation": e.operation},
            )
            raise ApplicationError(
                ApplicationErrorKind.INTERNAL, CREATE_FAILED_MESSAGE,
            ) from e
        if existing is not None:
            raise ApplicationError(
                ApplicationErrorKind.CONFLICT, EMAIL_TAKEN_MESSAGE,
            )

        password_hash = None
        if data.password:
            # scrypt is CPU-bound; keep it off the event loop
            loop = asyncio.get_running_loop()
            password_hash = await loop.run_in_executor(
                None, hash_password, data.password,
            )
        new_user = NewUser(
            email=data.email, username=data.username, password_hash=password_hash,
        )
        try:
            return await self._repository.create(new_user)
        except StorageError as e:
            self._log_create_failure(e)
            raise ApplicationError(
                ApplicationErrorKind.INTERNAL, CREATE_FAILED_MESSAGE,
            ) from e

    @staticmethod
    def _log_create_failure(error: StorageError) -> None:
        match error.kind:
            case StorageErrorKind.UNIQUE_VIOLATION:
                # Another request inserted the same email after our pre-check
                logger.warning(
                    "User insert lost a uniqueness race",
                    extra={"error_kind": error.kind.value},
                )
            case StorageErrorKind.UNKNOWN:
                logger.error(
                    f"Database error during user creation: {error.message}",
                    extra={
                        "error_kind": error.kind.value,
                        "operation": error.operation,
                    },
                )
            case _ as unreachable:
                assert_never(unreachable)
