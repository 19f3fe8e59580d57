"""Health Probe - reports whether the store is reachable.

Invariants:
    - GET /health returns 200 {status: "ok", timestamp} when the store answers
    - GET /health returns 503 {status: "error", message, timestamp} otherwise
    - Store error details are logged, never returned
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, status
from fastapi.responses import JSONResponse

from userbase.infrastructure.database import DatabaseSessionManager
from userbase.schemas.common import HealthResponse

logger = logging.getLogger(__name__)


def register_health_routes(app: FastAPI, db: DatabaseSessionManager) -> None:
    router = APIRouter(tags=["health"])

    @router.get(
        "/health",
        response_model=HealthResponse,
        response_model_exclude_none=True,
        responses={503: {"model": HealthResponse}},
        summary="Health check",
    )
    async def health_check():
        """Checks that the service is running and the database is reachable."""
        timestamp = datetime.now(timezone.utc)
        if not await db.health_check():
            logger.warning("Health check failed: database unreachable")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "error",
                    "message": "Service unavailable",
                    "timestamp": timestamp.isoformat(),
                },
            )
        return HealthResponse(status="ok", timestamp=timestamp)

    app.include_router(router)
