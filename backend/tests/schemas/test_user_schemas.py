"""User Schemas - request validation and response shape.

Invariants:
    - email is required, normalized (trim + lower) and pattern-checked
    - password shorter than 8 chars is rejected
    - unknown body fields are rejected
    - UserResponse never exposes credentials
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from userbase.core.user import User, UserCreate
from userbase.schemas.user import UserCreateRequest, UserResponse


def test_email_is_normalized():
    body = UserCreateRequest(email="  A@B.com ")
    assert body.email == "a@b.com"


def test_email_is_required():
    with pytest.raises(ValidationError):
        UserCreateRequest()


@pytest.mark.parametrize("email", ["nope", "a@b", "@b.com", "a b@c.com", ""])
def test_malformed_email_rejected(email):
    with pytest.raises(ValidationError):
        UserCreateRequest(email=email)


def test_short_password_rejected():
    with pytest.raises(ValidationError):
        UserCreateRequest(email="a@b.com", password="short")


def test_unknown_fields_rejected():
    with pytest.raises(ValidationError):
        UserCreateRequest(email="a@b.com", role="admin")


def test_blank_username_rejected():
    with pytest.raises(ValidationError):
        UserCreateRequest(email="a@b.com", username="   ")


def test_to_dto_carries_all_fields():
    body = UserCreateRequest(email="a@b.com", username="al", password="longenough")
    assert body.to_dto() == UserCreate(
        email="a@b.com", username="al", password="longenough",
    )


def test_response_has_no_credentials():
    now = datetime.now(timezone.utc)
    user = User(
        id="6f1c3c0e-9a7b-4c59-9d3e-2b8f7a1d0c11", email="a@b.com",
        username=None, password_hash="scrypt$00$00",
        created_at=now, updated_at=now,
    )
    dumped = UserResponse.from_domain(user).model_dump()
    assert "password" not in dumped
    assert "password_hash" not in dumped
    assert dumped["id"] == user.id
