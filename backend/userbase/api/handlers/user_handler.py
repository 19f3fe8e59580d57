"""User Handler - adapts validated /users requests to UserService calls.

Invariants:
    - Success: 201 for creation, 200 for reads, body is UserResponse (no credentials)
    - Absence on read: 404 "User with ID <id> not found."
    - ApplicationError INVALID_INPUT/CONFLICT: that status with the error's own message
    - Everything else (INTERNAL, leaked StorageError, unclassified): 500 with a generic message
    - Every failure is logged with the triggering input before the response is built

Design Decisions:
    - Errors are returned as JSONResponse, not raised: the handler owns the mapping,
      global handlers only cover transport failures (ADR: handler-level status mapping)
    - Passwords are redacted from logged bodies
"""

import logging
from typing import assert_never

from fastapi import status
from fastapi.responses import JSONResponse

from userbase.api.responses import error_response
from userbase.core.errors import (
    ApplicationError, ApplicationErrorKind, StorageError,
)
from userbase.schemas.user import UserCreateRequest, UserResponse
from userbase.services.user_service import UserService

logger = logging.getLogger(__name__)


class UserHandler:
    """Handlers for POST /users and GET /users/{user_id}."""

    def __init__(self, service: UserService):
        self._service = service

    async def create_user(
        self, body: UserCreateRequest,
    ) -> UserResponse | JSONResponse:
        """Create a user."""
        try:
            user = await self._service.create(body.to_dto())
        except Exception as exc:
            logged_input = {"body": body.model_dump(exclude={"password"})}
            self._log_failure(exc, "Error creating user", logged_input)
            return _map_error(exc, "creating the user")
        return UserResponse.from_domain(user)

    async def get_user_by_id(self, user_id: str) -> UserResponse | JSONResponse:
        """Get a user by id."""
        try:
            user = await self._service.get_by_id(user_id)
        except Exception as exc:
            self._log_failure(
                exc, "Error fetching user by ID", {"params": {"user_id": user_id}},
            )
            return _map_error(exc, "fetching the user")
        if user is None:
            return error_response(
                status.HTTP_404_NOT_FOUND, f"User with ID {user_id} not found.",
            )
        return UserResponse.from_domain(user)

    @staticmethod
    def _log_failure(exc: Exception, message: str, logged_input: dict) -> None:
        if isinstance(exc, ApplicationError) and exc.code < 500:
            logger.warning(
                f"{message}: {exc.message}",
                extra={"error_kind": exc.kind.value, "input": logged_input},
            )
            return
        logger.error(
            f"{message}: {exc!r}",
            extra={"input": logged_input},
            exc_info=not isinstance(exc, ApplicationError),
        )


def _map_error(exc: Exception, action: str) -> JSONResponse:
    """Translate a failure into the client-facing response."""
    if isinstance(exc, ApplicationError):
        match exc.kind:
            case ApplicationErrorKind.INVALID_INPUT | ApplicationErrorKind.CONFLICT:
                return error_response(exc.code, exc.message)
            case ApplicationErrorKind.INTERNAL:
                return error_response(
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    f"An unexpected error occurred while {action}.",
                )
            case _ as unreachable:
                assert_never(unreachable)
    if isinstance(exc, StorageError):
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"A database error occurred while {action}.",
        )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        f"An unexpected error occurred while {action}.",
    )
