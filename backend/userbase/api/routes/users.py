"""User Routes - composes the /users stack and binds its endpoints.

Invariants:
    - Construction order: repository -> service -> handler, each receiving only the prior stage
    - Composition happens once per application, not per request
    - Request bodies are validated by pydantic before the handler runs
    - Every documented failure status maps to ErrorBody in the OpenAPI schema
"""

import logging

from fastapi import APIRouter, FastAPI, status

from userbase.api.handlers.user_handler import UserHandler
from userbase.infrastructure.database import DatabaseSessionManager
from userbase.infrastructure.user_repository import SqlAlchemyUserRepository
from userbase.schemas.common import ErrorBody
from userbase.schemas.user import UserResponse
from userbase.services.user_service import UserService

logger = logging.getLogger(__name__)


def _error_responses(*codes: int) -> dict[int, dict]:
    return {code: {"model": ErrorBody} for code in codes}


def build_user_handler(db: DatabaseSessionManager) -> UserHandler:
    repository = SqlAlchemyUserRepository(db)
    service = UserService(repository)
    return UserHandler(service)


def register_user_routes(
    app: FastAPI, db: DatabaseSessionManager, prefix: str,
) -> UserHandler:
    """Build the user stack and register POST {prefix} and GET {prefix}/{user_id}."""
    handler = build_user_handler(db)
    router = APIRouter(prefix=prefix, tags=["users"])

    router.add_api_route(
        "",
        handler.create_user,
        methods=["POST"],
        status_code=status.HTTP_201_CREATED,
        response_model=UserResponse,
        responses=_error_responses(400, 409, 500),
        summary="Create user",
        description="Creates a user. The email must not already be registered.",
    )
    router.add_api_route(
        "/{user_id}",
        handler.get_user_by_id,
        methods=["GET"],
        status_code=status.HTTP_200_OK,
        response_model=UserResponse,
        responses=_error_responses(400, 404, 500),
        summary="Get user by ID",
        description="Retrieves a user by their unique ID.",
    )

    app.include_router(router)
    logger.info(f"Registered user routes under prefix '{prefix}'")
    return handler
