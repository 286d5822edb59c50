"""Tests for login and the bearer-token guard."""
from datetime import datetime, timedelta

import jwt

from catering_platform.catering_platform.catering_service.config import settings
from catering_platform.catering_platform.catering_service.auth import create_access_token, decode_access_token


def test_login_returns_bearer_token(client):
    resp = client.post("/auth/login", json={"username": "admin", "password": "admin"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["token_type"] == "bearer"
    assert decode_access_token(data["access_token"])["sub"] == "admin"


def test_login_with_wrong_password(client):
    resp = client.post("/auth/login", json={"username": "admin", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid credentials"}


def test_login_with_missing_fields(client):
    resp = client.post("/auth/login", json={"username": "admin"})
    assert resp.status_code == 400
    assert resp.json()["error_type"] == "validation_error"
    assert "password" in resp.json()["details"]


def test_protected_route_without_header(client):
    resp = client.get("/facilities")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Authorization header not found"}


def test_protected_route_with_garbage_token(client):
    resp = client.get("/tags", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid or expired token"}


def test_protected_route_with_expired_token(client):
    past = datetime.utcnow() - timedelta(hours=2)
    token = jwt.encode(
        {"sub": "admin", "iss": settings.JWT_ISSUER, "iat": past, "exp": past + timedelta(minutes=5)},
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    resp = client.get("/locations", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid or expired token"}


def test_token_signed_with_other_key_is_rejected(client):
    token = jwt.encode(
        {"sub": "admin", "iss": settings.JWT_ISSUER, "exp": datetime.utcnow() + timedelta(minutes=5)},
        "some-other-secret-key-that-is-long-enough",
        algorithm="HS256",
    )
    resp = client.get("/employees", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_valid_token_is_accepted(client):
    token = create_access_token("admin")
    resp = client.get("/tags", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200


def test_configured_password_hash_takes_precedence(client, monkeypatch):
    from catering_platform.catering_platform.catering_service import auth

    monkeypatch.setattr(settings, "AUTH_PASSWORD_HASH", auth.hash_password("s3cret-pass"))
    auth.operator_password_hash.cache_clear()
    try:
        assert client.post("/auth/login", json={"username": "admin", "password": "s3cret-pass"}).status_code == 200
        assert client.post("/auth/login", json={"username": "admin", "password": "admin"}).status_code == 401
    finally:
        monkeypatch.undo()
        auth.operator_password_hash.cache_clear()
