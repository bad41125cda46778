from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from vowsite.db.base import Base


ADMIN_PASSWORD_KEY = "admin_password"


class AdminSetting(Base):
    """Admin key/value settings. Provisioned out of band (scripts/setup_vows_db.py)."""

    __tablename__ = "admin_settings"

    setting_key = Column(String(128), primary_key=True)
    setting_value = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
