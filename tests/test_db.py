"""
tests.test_db

Timestamp helper and write-conflict translation.
"""

from __future__ import annotations

import warnings
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from rbac_platform.db.base import utcnow
from rbac_platform.db.session import conflict_on_duplicate
from rbac_platform.errors import ConflictError


def test_utcnow_is_naive_utc_without_deprecation_warning() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        now = utcnow()

    assert now.tzinfo is None
    assert abs(datetime.now(UTC).replace(tzinfo=None) - now) < timedelta(seconds=5)


class _RecordingSession:
    def __init__(self) -> None:
        self.rolled_back = False

    async def rollback(self) -> None:
        self.rolled_back = True


@pytest.mark.asyncio
async def test_integrity_error_becomes_conflict() -> None:
    session = _RecordingSession()

    with pytest.raises(ConflictError) as exc_info:
        async with conflict_on_duplicate(session, "Role already exists: ROLE_X"):
            raise IntegrityError("INSERT INTO roles", {}, Exception("UNIQUE constraint failed"))

    assert exc_info.value.message == "Role already exists: ROLE_X"
    assert exc_info.value.status_code == 409
    assert session.rolled_back


@pytest.mark.asyncio
async def test_other_errors_pass_through() -> None:
    session = _RecordingSession()

    with pytest.raises(RuntimeError):
        async with conflict_on_duplicate(session, "unused"):
            raise RuntimeError("boom")

    assert not session.rolled_back
