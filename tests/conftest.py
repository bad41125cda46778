import os

# Settings are read at import time
os.environ.setdefault("VOWS_DATABASE_URL", "sqlite://")
os.environ["REDIS_URL"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vowsite.db.base import Base
from vowsite.db.init_db import init_db
from vowsite.db.session import get_db
from vowsite.models.admin_setting import ADMIN_PASSWORD_KEY, AdminSetting

ADMIN_PASSWORD = "Wedding-2024"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    assert init_db(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def admin_password(db):
    db.add(AdminSetting(setting_key=ADMIN_PASSWORD_KEY, setting_value=ADMIN_PASSWORD))
    db.commit()
    return ADMIN_PASSWORD


@pytest.fixture
def client(session_factory):
    from vowsite.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # No context manager: skip lifespan so logging config stays untouched
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def vow_data():
    def make(name_en: str, name_pt: str | None = None) -> dict:
        return {
            "name_en": name_en,
            "name_pt": name_pt or name_en,
            "text_en": f"I, {name_en}, promise.",
            "text_pt": f"Eu, {name_pt or name_en}, prometo.",
        }

    return make
