"""Users API - end-to-end HTTP behavior over the in-memory store.

Tests cover:
    - POST /users -> 201, repeat -> 409 with the standard body
    - GET /users/{id} -> 200 with the same fields, unknown id -> 404, malformed id -> 400
    - Schema-invalid bodies -> 400 from the validation layer, service never called
    - Credentials never appear in responses
"""

import uuid
from unittest.mock import AsyncMock

import pytest

from userbase.core.credentials import verify_password
from userbase.infrastructure.user_repository import SqlAlchemyUserRepository
from userbase.services.user_service import UserService

USERS = "/api/v1/users"
ZERO_ID = "00000000-0000-0000-0000-000000000000"


async def test_create_user_returns_201(client):
    res = await client.post(USERS, json={"email": "a@b.com"})
    assert res.status_code == 201
    body = res.json()
    assert uuid.UUID(body["id"])
    assert body["email"] == "a@b.com"
    assert "created_at" in body
    assert "updated_at" in body


async def test_create_then_duplicate_then_fetch_then_missing(client):
    created = await client.post(USERS, json={"email": "a@b.com"})
    assert created.status_code == 201
    user_id = created.json()["id"]

    repeat = await client.post(USERS, json={"email": "a@b.com"})
    assert repeat.status_code == 409
    assert repeat.json() == {
        "statusCode": 409,
        "error": "Conflict",
        "message": "User with this email already exists.",
    }

    fetched = await client.get(f"{USERS}/{user_id}")
    assert fetched.status_code == 200
    assert fetched.json() == created.json()

    missing = await client.get(f"{USERS}/{ZERO_ID}")
    assert missing.status_code == 404
    assert missing.json() == {
        "statusCode": 404,
        "error": "Not Found",
        "message": f"User with ID {ZERO_ID} not found.",
    }


async def test_duplicate_differs_only_in_case_is_conflict(client):
    await client.post(USERS, json={"email": "a@b.com"})
    res = await client.post(USERS, json={"email": "A@B.COM"})
    assert res.status_code == 409


async def test_malformed_id_returns_400(client):
    res = await client.get(f"{USERS}/not-a-uuid")
    assert res.status_code == 400
    assert res.json() == {
        "statusCode": 400,
        "error": "Bad Request",
        "message": "Invalid user ID format provided.",
    }


async def test_password_is_stored_hashed_and_never_returned(client, db_manager):
    res = await client.post(
        USERS, json={"email": "a@b.com", "password": "longenough1"},
    )
    assert res.status_code == 201
    assert "password" not in res.json()
    assert "password_hash" not in res.json()

    stored = await SqlAlchemyUserRepository(db_manager).find_by_id(res.json()["id"])
    assert stored.password_hash != "longenough1"
    assert verify_password("longenough1", stored.password_hash)


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"email": "not-an-email"},
        {"email": "a@b.com", "password": "short"},
        {"email": "a@b.com", "is_admin": True},
        {"email": 42},
    ],
)
async def test_invalid_body_rejected_before_handler(client, monkeypatch, payload):
    create = AsyncMock()
    monkeypatch.setattr(UserService, "create", create)
    res = await client.post(USERS, json=payload)
    assert res.status_code == 400
    body = res.json()
    assert body["statusCode"] == 400
    assert body["error"] == "Bad Request"
    assert body["message"]
    create.assert_not_awaited()


async def test_missing_email_message_names_field(client):
    res = await client.post(USERS, json={})
    assert "body.email" in res.json()["message"]


async def test_non_json_body_rejected(client):
    res = await client.post(
        USERS, content=b"email=a@b.com",
        headers={"content-type": "application/x-www-form-urlencoded"},
    )
    assert res.status_code == 400


async def test_storage_failure_returns_generic_500(client, monkeypatch):
    from userbase.core.errors import StorageError, StorageErrorKind

    async def _boom(self, data):
        raise StorageError(StorageErrorKind.UNKNOWN, "relation users does not exist")

    monkeypatch.setattr(SqlAlchemyUserRepository, "create", _boom)
    res = await client.post(USERS, json={"email": "a@b.com"})
    assert res.status_code == 500
    body = res.json()
    assert body["error"] == "Internal Server Error"
    assert "relation" not in body["message"]
    assert "users" not in body["message"]
