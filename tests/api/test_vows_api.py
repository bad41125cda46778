"""HTTP tests for the vows, unlock and health routes."""
import logging
from unittest.mock import patch

from fastapi.testclient import TestClient

from vowsite.core.config import settings
from vowsite.core.errors import StorageError


def _publish_body(password, vow_data, groom="Sam", bride="Ana"):
    return {"password": password, "groom": vow_data(groom, "Samuel"), "bride": vow_data(bride)}


def test_health(client):
    assert client.get("/api/health").json()["status"] == "ok"
    assert client.get("/health").status_code == 200


def test_unlock_status_defaults_locked(client):
    resp = client.get("/api/unlock-status")
    assert resp.status_code == 200
    assert resp.json()["is_unlocked"] is False


def test_unlock_requires_valid_password(client, admin_password):
    resp = client.post("/api/unlock", json={"password": "wrong"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid admin password"}
    assert client.get("/api/unlock-status").json()["is_unlocked"] is False


def test_unlock_and_lock(client, admin_password):
    resp = client.post("/api/unlock", json={"password": admin_password})
    assert resp.json() == {"success": True, "is_unlocked": True}
    status = client.get("/api/unlock-status").json()
    assert status["is_unlocked"] is True
    assert status["unlocked_at"] is not None
    assert status["locked_at"] is None

    resp = client.post("/api/lock", json={"password": admin_password})
    assert resp.json() == {"success": True, "is_unlocked": False}
    status = client.get("/api/unlock-status").json()
    assert status["is_unlocked"] is False
    assert status["unlocked_at"] is not None
    assert status["locked_at"] is not None


def test_lock_requires_password(client, admin_password):
    assert client.post("/api/lock", json={}).status_code == 401


def test_publish_requires_password(client, admin_password, vow_data):
    resp = client.post("/api/vows", json=_publish_body("nope", vow_data))
    assert resp.status_code == 401


def test_publish_rejects_missing_fields(client, admin_password, vow_data):
    body = _publish_body(admin_password, vow_data)
    body["bride"]["text_pt"] = "   "
    assert client.post("/api/vows", json=body).status_code == 422

    body = _publish_body(admin_password, vow_data)
    del body["groom"]["name_pt"]
    assert client.post("/api/vows", json=body).status_code == 422


def test_vows_hidden_while_locked(client, admin_password, vow_data):
    client.post("/api/vows", json=_publish_body(admin_password, vow_data))
    resp = client.get("/api/vows")
    assert resp.status_code == 403
    assert resp.json() == {"error": "Vows are locked"}


def test_vows_readable_while_locked_when_enforcement_off(client, admin_password, vow_data):
    client.post("/api/vows", json=_publish_body(admin_password, vow_data))
    with patch.object(settings, "vows_enforce_lock", False):
        resp = client.get("/api/vows")
    assert resp.status_code == 200


def test_publish_then_read_when_unlocked(client, admin_password, vow_data):
    resp = client.post("/api/vows", json=_publish_body(admin_password, vow_data))
    assert resp.json() == {"success": True, "message": "Vows saved successfully"}
    client.post("/api/unlock", json={"password": admin_password})

    data = client.get("/api/vows").json()
    assert data["groom"]["name_en"] == "Sam"
    assert data["groom"]["name_pt"] == "Samuel"
    assert data["groom"]["person_type"] == "groom"
    assert data["bride"]["name_en"] == "Ana"
    assert data["bride"]["is_active"] is True


def test_republish_returns_latest(client, admin_password, vow_data):
    client.post("/api/vows", json=_publish_body(admin_password, vow_data))
    client.post("/api/vows", json=_publish_body(admin_password, vow_data, groom="Samuel", bride="Anabela"))
    client.post("/api/unlock", json={"password": admin_password})

    data = client.get("/api/vows").json()
    assert data["groom"]["name_en"] == "Samuel"
    assert data["bride"]["name_en"] == "Anabela"


def test_unlocked_without_vows_is_404(client, admin_password):
    client.post("/api/unlock", json={"password": admin_password})
    resp = client.get("/api/vows")
    assert resp.status_code == 404


def test_history_requires_admin_header(client, admin_password, vow_data):
    client.post("/api/vows", json=_publish_body(admin_password, vow_data))
    client.post("/api/vows", json=_publish_body(admin_password, vow_data, groom="Samuel"))

    assert client.get("/api/vows/history").status_code == 401
    resp = client.get(
        "/api/vows/history",
        params={"person_type": "groom"},
        headers={"X-Admin-Password": admin_password},
    )
    assert resp.status_code == 200
    assert [v["name_en"] for v in resp.json()] == ["Samuel", "Sam"]
    assert [v["is_active"] for v in resp.json()] == [True, False]


def test_storage_error_maps_to_500(client, admin_password, vow_data):
    with patch("vowsite.api.routes.vows.VowService.publish", side_effect=StorageError("publish")):
        resp = client.post("/api/vows", json=_publish_body(admin_password, vow_data))
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to publish"}


def test_rate_limited_admin_gets_429(client, admin_password):
    with patch("vowsite.api.deps.is_rate_limited", return_value=True):
        resp = client.post("/api/unlock", json={"password": admin_password})
    assert resp.status_code == 429


def test_request_id_header_echoed(client):
    resp = client.get("/api/health", headers={"X-Request-Id": "abc123"})
    assert resp.headers["X-Request-Id"] == "abc123"


def test_metrics_endpoint(client):
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "vows_published_total" in resp.text


def test_unhandled_error_is_logged_with_500(client, caplog):
    from vowsite.main import app

    failing = TestClient(app, raise_server_exceptions=False)
    with caplog.at_level(logging.INFO, logger="vowsite.api"):
        with patch("vowsite.api.routes.unlock.UnlockService.get_status", side_effect=RuntimeError("boom")):
            resp = failing.get("/api/unlock-status", headers={"X-Request-Id": "req-500"})

    assert resp.status_code == 500
    records = [r for r in caplog.records if r.getMessage() == "http_request"]
    assert len(records) == 1
    assert records[0].status_code == 500
    assert records[0].request_id == "req-500"
    assert records[0].path == "/api/unlock-status"
    assert records[0].error == "boom"
