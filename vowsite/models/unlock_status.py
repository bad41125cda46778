from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer

from vowsite.db.base import Base


class UnlockStatus(Base):
    """Vows visibility gate (single row, id=1)."""

    __tablename__ = "unlock_status"

    id = Column(Integer, primary_key=True, default=1)
    is_unlocked = Column(Boolean, nullable=False, default=False)
    unlocked_at = Column(DateTime(timezone=True), nullable=True)
    locked_at = Column(DateTime(timezone=True), nullable=True)
    last_updated = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
