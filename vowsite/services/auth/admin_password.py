"""
Admin shared-secret check against the admin_settings table.

Stored values are either the plain secret or "sha256:<hexdigest>".
Any stored value starting with "sha256:" is compared as a digest, so a plain
secret can never begin with that prefix. setup_vows_db refuses to store one.
"""
import hashlib
import hmac
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vowsite.models.admin_setting import ADMIN_PASSWORD_KEY, AdminSetting

logger = logging.getLogger("auth")

HASH_PREFIX = "sha256:"


def hash_password(password: str) -> str:
    """Value to store in admin_settings for a hashed secret."""
    return HASH_PREFIX + hashlib.sha256(password.encode("utf-8")).hexdigest()


def _matches(candidate: str, stored: str) -> bool:
    if stored.startswith(HASH_PREFIX):
        return hmac.compare_digest(hash_password(candidate), stored)
    return hmac.compare_digest(candidate.encode("utf-8"), stored.encode("utf-8"))


class AdminAuthenticator:
    def __init__(self, db: Session) -> None:
        self.db = db

    def verify(self, password: str | None) -> bool:
        """True iff password matches the stored admin secret. Never raises."""
        if not isinstance(password, str):
            return False
        try:
            row = (
                self.db.query(AdminSetting)
                .filter(AdminSetting.setting_key == ADMIN_PASSWORD_KEY)
                .first()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("admin_password_lookup_failed", extra={"error": str(e)})
            return False
        if row is None or row.setting_value is None:
            logger.warning("admin_password_not_provisioned")
            return False
        return _matches(password, row.setting_value)
