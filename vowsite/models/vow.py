from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text, text

from vowsite.db.base import Base


class PersonType(str, Enum):
    GROOM = "groom"
    BRIDE = "bride"


class Vow(Base):
    """One published version of a person's vows. Rows are never deleted, only deactivated."""

    __tablename__ = "vows"
    __table_args__ = (
        # At most one active row per person_type
        Index(
            "uq_vows_active_person_type",
            "person_type",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    person_type = Column(String(16), nullable=False, index=True)
    name_en = Column(String(255), nullable=True)
    name_pt = Column(String(255), nullable=True)
    text_en = Column(Text, nullable=True)
    text_pt = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
