"""Tests for UnlockService — gate state machine and timestamps."""
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from vowsite.core.errors import StorageError
from vowsite.models.unlock_status import UnlockStatus
from vowsite.services.unlock.service import UnlockService

T1 = datetime(2024, 6, 1, 15, 0, tzinfo=timezone.utc)
T2 = datetime(2024, 6, 1, 15, 30, tzinfo=timezone.utc)
T3 = datetime(2024, 6, 1, 16, 0, tzinfo=timezone.utc)


def _naive(iso: str | None) -> datetime | None:
    # SQLite drops tzinfo on the way back
    return datetime.fromisoformat(iso).replace(tzinfo=None) if iso else None


def test_status_defaults_to_locked_without_row(db):
    status = UnlockService(db).get_status()
    assert status == {"is_unlocked": False, "unlocked_at": None, "locked_at": None, "last_updated": None}
    assert db.query(UnlockStatus).count() == 0


def test_unlock_then_lock_keeps_both_timestamps(db):
    svc = UnlockService(db)
    with patch("vowsite.services.unlock.service._now", side_effect=[T1, T2]):
        svc.set_unlocked(True)
        status = svc.set_unlocked(False)

    assert status["is_unlocked"] is False
    assert _naive(status["unlocked_at"]) == T1.replace(tzinfo=None)
    assert _naive(status["locked_at"]) == T2.replace(tzinfo=None)
    assert _naive(status["last_updated"]) == T2.replace(tzinfo=None)


def test_repeat_unlock_refreshes_last_updated(db):
    svc = UnlockService(db)
    with patch("vowsite.services.unlock.service._now", side_effect=[T1, T2, T3]):
        svc.set_unlocked(False)
        svc.set_unlocked(True)
        status = svc.set_unlocked(True)

    assert status["is_unlocked"] is True
    assert _naive(status["locked_at"]) == T1.replace(tzinfo=None)
    assert _naive(status["unlocked_at"]) == T3.replace(tzinfo=None)
    assert _naive(status["last_updated"]) == T3.replace(tzinfo=None)
    assert db.query(UnlockStatus).count() == 1


def test_get_status_reflects_last_write(db):
    svc = UnlockService(db)
    svc.set_unlocked(True)
    assert UnlockService(db).get_status()["is_unlocked"] is True


class TestUnlockServiceErrors(unittest.TestCase):
    def test_set_unlocked_failure_rolls_back(self):
        db = MagicMock()
        db.query.return_value.filter.return_value.with_for_update.return_value.first.return_value = None
        db.commit.side_effect = OperationalError("UPDATE", {}, Exception("deadlock"))

        with self.assertRaises(StorageError) as ctx:
            UnlockService(db).set_unlocked(True)
        self.assertEqual(ctx.exception.operation, "set_unlocked")
        db.rollback.assert_called_once()

    def test_get_status_failure_raises_storage_error(self):
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with self.assertRaises(StorageError):
            UnlockService(db).get_status()


@pytest.mark.parametrize("value", [1, "yes"])
def test_truthy_values_unlock(db, value):
    assert UnlockService(db).set_unlocked(value)["is_unlocked"] is True
