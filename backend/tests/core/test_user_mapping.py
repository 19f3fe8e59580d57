"""User row mapping - user_from_row accepts well-formed rows and rejects malformed ones.

Tests cover:
    - Well-formed row maps every field, id becomes a string
    - Naive timestamps are read as UTC
    - Missing or null required columns raise MalformedRowError
    - Optional columns may be absent
"""

import uuid
from datetime import datetime, timezone, timedelta

import pytest

from userbase.core.user import MalformedRowError, user_from_row


def _row(**overrides):
    now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    row = {
        "id": uuid.UUID("6f1c3c0e-9a7b-4c59-9d3e-2b8f7a1d0c11"),
        "email": "a@b.com",
        "username": "alice",
        "password_hash": None,
        "created_at": now,
        "updated_at": now,
    }
    row.update(overrides)
    return row


def test_maps_well_formed_row():
    user = user_from_row(_row())
    assert user.id == "6f1c3c0e-9a7b-4c59-9d3e-2b8f7a1d0c11"
    assert user.email == "a@b.com"
    assert user.username == "alice"
    assert user.created_at.tzinfo is not None


def test_naive_timestamps_are_treated_as_utc():
    naive = datetime(2026, 1, 2, 3, 4, 5)
    user = user_from_row(_row(created_at=naive, updated_at=naive))
    assert user.created_at == naive.replace(tzinfo=timezone.utc)


def test_aware_timestamps_are_normalized_to_utc():
    plus_two = timezone(timedelta(hours=2))
    ts = datetime(2026, 1, 2, 5, 0, tzinfo=plus_two)
    user = user_from_row(_row(created_at=ts, updated_at=ts))
    assert user.created_at.utcoffset() == timedelta(0)
    assert user.created_at == ts


@pytest.mark.parametrize("field", ["id", "email", "created_at", "updated_at"])
def test_missing_required_field_is_rejected(field):
    row = _row()
    del row[field]
    with pytest.raises(MalformedRowError, match=field):
        user_from_row(row)


def test_null_required_field_is_rejected():
    with pytest.raises(MalformedRowError):
        user_from_row(_row(email=None))


def test_non_datetime_timestamp_is_rejected():
    with pytest.raises(MalformedRowError):
        user_from_row(_row(created_at="yesterday"))


def test_optional_fields_may_be_absent():
    row = _row()
    del row["username"]
    del row["password_hash"]
    user = user_from_row(row)
    assert user.username is None
    assert user.password_hash is None
