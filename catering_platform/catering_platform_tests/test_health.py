"""Tests for health and readiness endpoints."""
from catering_platform.catering_platform.catering_service.routes import health


def test_health_needs_no_auth(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
    assert "timestamp" in resp.json()


def test_ready_when_database_is_up(client):
    resp = client.get("/ready")
    assert resp.status_code == 200
    assert resp.json()["database"] == "connected"


def test_ready_returns_503_when_database_is_down(client, monkeypatch):
    monkeypatch.setattr(health, "check_db_connection", lambda: False)
    resp = client.get("/ready")
    assert resp.status_code == 503
    assert resp.json()["status"] == "not_ready"


def test_root(client):
    assert client.get("/").json()["service"] == "Catering Service"


def test_runner_starts_uvicorn_with_configured_address(monkeypatch):
    from catering_platform.catering_platform.catering_service import __main__ as runner

    calls = {}
    monkeypatch.setattr(runner.uvicorn, "run", lambda app, **kwargs: calls.update(app=app, **kwargs))
    runner.main()

    assert calls["app"].endswith("catering_service.main:app")
    assert calls["port"] == runner.settings.PORT
