"""Tests for settings loading."""
import pytest

from vowsite.core.config import load_settings
from vowsite.core.errors import ConfigurationError


def test_missing_database_url_is_fatal(monkeypatch):
    monkeypatch.delenv("VOWS_DATABASE_URL", raising=False)
    with pytest.raises(ConfigurationError) as exc:
        load_settings()
    assert "vows_database_url" in str(exc.value)


def test_postgres_scheme_normalized(monkeypatch):
    monkeypatch.setenv("VOWS_DATABASE_URL", "postgres://u:p@db:5432/vows?sslmode=require")
    assert load_settings().vows_database_url == "postgresql://u:p@db:5432/vows?sslmode=require"


def test_cors_origins_list(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    assert load_settings().cors_origins_list == ["http://a.test", "http://b.test"]


def test_non_positive_poll_interval_rejected(monkeypatch):
    monkeypatch.setenv("POLL_INTERVAL_SECONDS", "0")
    with pytest.raises(ConfigurationError):
        load_settings()
