"""
Schema bootstrap: create the vows tables if they are missing.
Called on API startup and by scripts/setup_vows_db.py.
"""
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from vowsite.db.base import Base
from vowsite.db.session import engine as default_engine

# Register models on Base.metadata
from vowsite.models import admin_setting, unlock_status, vow  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(bind: Engine | None = None) -> bool:
    """Create missing tables. Returns False (and logs) instead of raising."""
    try:
        Base.metadata.create_all(bind=bind or default_engine)
    except SQLAlchemyError as e:
        logger.exception("vows_db_init_failed", extra={"error": str(e)})
        return False
    logger.info("vows_db_initialized")
    return True
