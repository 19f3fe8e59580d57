"""User Schemas - request validation and response shape for /users.

Invariants:
    - UserCreateRequest.email: required, trimmed, lower-cased, must look like an address
    - UserCreateRequest.password: optional, 8-128 chars
    - Unknown body fields are rejected (extra="forbid")
    - UserResponse carries no password or hash

Design Decisions:
    - Regex pattern over EmailStr: keeps validation dependency-free; deliverability
      is not this layer's concern
    - field_validator(mode="before") for side-effect-free transforms (strip/lower)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from userbase.core.user import User, UserCreate

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreateRequest(BaseModel):
    """POST /users body."""
    model_config = ConfigDict(extra="forbid")

    email: str = Field(
        min_length=3, max_length=320, pattern=EMAIL_PATTERN,
        description="User email address (natural key)",
    )
    username: str | None = Field(None, min_length=1, max_length=100)
    password: str | None = Field(None, min_length=8, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v):
        if isinstance(v, str):
            v = v.strip()
        return v

    def to_dto(self) -> UserCreate:
        return UserCreate(
            email=self.email, username=self.username, password=self.password,
        )


class UserResponse(BaseModel):
    """Public user representation."""
    id: str
    email: str
    username: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            username=user.username,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
