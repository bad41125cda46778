"""Vows visibility gate: a single LOCKED/UNLOCKED row with transition timestamps."""
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vowsite.core.errors import StorageError
from vowsite.models.unlock_status import UnlockStatus
from vowsite.utils.metrics import gate_transitions_total, storage_errors_total

logger = logging.getLogger(__name__)

STATUS_ROW_ID = 1


def _now() -> datetime:
    return datetime.now(timezone.utc)


class UnlockService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self) -> UnlockStatus | None:
        return self.db.query(UnlockStatus).filter(UnlockStatus.id == STATUS_ROW_ID).first()

    def get_status(self) -> dict[str, Any]:
        """Current gate state; LOCKED with no timestamps until the row exists."""
        try:
            row = self.get()
        except SQLAlchemyError as e:
            self.db.rollback()
            storage_errors_total.labels(operation="get_status").inc()
            logger.exception("unlock_status_fetch_failed", extra={"error": str(e)})
            raise StorageError("get_status") from e
        return self.as_dict(row)

    def set_unlocked(self, value: bool) -> dict[str, Any]:
        """
        Move the gate to UNLOCKED or LOCKED.
        Stamps unlocked_at or locked_at for the state just entered and always
        refreshes last_updated; the other timestamp is left as is.
        """
        value = bool(value)
        try:
            row = (
                self.db.query(UnlockStatus)
                .filter(UnlockStatus.id == STATUS_ROW_ID)
                .with_for_update()
                .first()
            )
            if row is None:
                row = UnlockStatus(id=STATUS_ROW_ID)
                self.db.add(row)
            now = _now()
            row.is_unlocked = value
            if value:
                row.unlocked_at = now
            else:
                row.locked_at = now
            row.last_updated = now
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            storage_errors_total.labels(operation="set_unlocked").inc()
            logger.exception("unlock_status_update_failed", extra={"error": str(e), "is_unlocked": value})
            raise StorageError("set_unlocked") from e
        gate_transitions_total.labels(state="unlocked" if value else "locked").inc()
        logger.info("unlock_status_changed", extra={"is_unlocked": value})
        return self.as_dict(row)

    @staticmethod
    def as_dict(row: UnlockStatus | None) -> dict[str, Any]:
        if row is None:
            return {"is_unlocked": False, "unlocked_at": None, "locked_at": None, "last_updated": None}
        return {
            "is_unlocked": bool(row.is_unlocked),
            "unlocked_at": row.unlocked_at.isoformat() if row.unlocked_at else None,
            "locked_at": row.locked_at.isoformat() if row.locked_at else None,
            "last_updated": row.last_updated.isoformat() if row.last_updated else None,
        }
