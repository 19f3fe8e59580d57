"""Request logging middleware: one line when a request arrives, one when it completes.

/health is skipped to keep probe traffic out of the logs.
"""

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

QUIET_PATHS = frozenset({"/health"})


def register_request_logging(app: FastAPI) -> None:

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        if request.url.path in QUIET_PATHS:
            return await call_next(request)
        logger.info(
            "Incoming request",
            extra={"method": request.method, "path": request.url.path},
        )
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "Request completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return response
