"""
VowService — bilingual vow content store.

Publishing is append-only: every publish deactivates the current active rows
and inserts one new active row per person, in a single transaction.
"""
import logging
from typing import Any

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vowsite.core.errors import StorageError
from vowsite.models.vow import PersonType, Vow
from vowsite.utils.metrics import storage_errors_total, vows_published_total

logger = logging.getLogger(__name__)

VOW_FIELDS = ("name_en", "name_pt", "text_en", "text_pt")


class VowService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_active(self) -> list[Vow]:
        """Active rows (at most one per person), ordered by person_type."""
        try:
            return (
                self.db.query(Vow)
                .filter(Vow.is_active.is_(True))
                .order_by(Vow.person_type.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            storage_errors_total.labels(operation="get_active").inc()
            logger.exception("vows_fetch_failed", extra={"error": str(e)})
            raise StorageError("get_active") from e

    def get_active_by_person(self) -> dict[str, Vow | None]:
        rows = self.get_active()
        return {
            person.value: next((r for r in rows if r.person_type == person.value), None)
            for person in (PersonType.GROOM, PersonType.BRIDE)
        }

    def history(self, person_type: str | None = None, limit: int = 50) -> list[Vow]:
        """All stored versions, newest first."""
        try:
            q = self.db.query(Vow)
            if person_type:
                q = q.filter(Vow.person_type == person_type)
            return q.order_by(Vow.id.desc()).limit(limit).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            storage_errors_total.labels(operation="history").inc()
            logger.exception("vows_history_failed", extra={"error": str(e)})
            raise StorageError("history") from e

    def publish(self, groom: dict[str, Any], bride: dict[str, Any]) -> dict[str, Any]:
        """
        Replace the active vows with a new version for both people.
        All-or-nothing: on any failure the previous active set stays in place.
        """
        try:
            # Serialize concurrent publishes on the rows about to be replaced
            (
                self.db.query(Vow.id)
                .filter(Vow.is_active.is_(True))
                .with_for_update()
                .all()
            )
            self.db.execute(
                update(Vow).where(Vow.is_active.is_(True)).values(is_active=False)
            )
            for person, data in ((PersonType.GROOM, groom), (PersonType.BRIDE, bride)):
                self.db.add(
                    Vow(
                        person_type=person.value,
                        is_active=True,
                        **{field: data.get(field) for field in VOW_FIELDS},
                    )
                )
            self.db.flush()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            storage_errors_total.labels(operation="publish").inc()
            logger.exception("vows_publish_failed", extra={"error": str(e)})
            raise StorageError("publish") from e
        vows_published_total.inc()
        for person in (PersonType.GROOM, PersonType.BRIDE):
            logger.info("vows_published", extra={"person_type": person.value})
        return {"success": True}

    @staticmethod
    def as_dict(vow: Vow | None) -> dict[str, Any] | None:
        if vow is None:
            return None
        return {
            "id": vow.id,
            "person_type": vow.person_type,
            "name_en": vow.name_en,
            "name_pt": vow.name_pt,
            "text_en": vow.text_en,
            "text_pt": vow.text_pt,
            "is_active": vow.is_active,
            "created_at": vow.created_at.isoformat() if vow.created_at else None,
        }
