"""Shared response schemas: the standard error body and the health payload."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class ErrorBody(BaseModel):
    """Body of every non-2xx API response."""
    statusCode: int
    error: str
    message: str


class HealthResponse(BaseModel):
    status: Literal["ok", "error"]
    timestamp: datetime
    message: str | None = None
