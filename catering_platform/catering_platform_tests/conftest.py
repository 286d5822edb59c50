import os
import tempfile

# Point the service at a throwaway database before the application is imported
_TEST_DIR = tempfile.mkdtemp(prefix="catering-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["LOG_DIR"] = os.path.join(_TEST_DIR, "logs")
os.environ["APP_ENV"] = "test"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["AUTH_USERNAME"] = "admin"
os.environ["AUTH_PASSWORD"] = "admin"

import pytest
from fastapi.testclient import TestClient

from catering_platform.catering_platform.catering_service.main import app
from catering_platform.catering_platform.catering_service.db import Base, engine, SessionLocal


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def auth_headers(client):
    resp = client.post("/auth/login", json={"username": "admin", "password": "admin"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def create_location(client, auth_headers):
    def _create(city="Rotterdam", **fields):
        resp = client.post("/locations", json={"city": city, **fields}, headers=auth_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _create


@pytest.fixture
def create_facility(client, auth_headers):
    def _create(name, location_id, tag_ids=None, tag_names=None):
        payload = {"name": name, "location_id": location_id}
        if tag_ids is not None:
            payload["tagIds"] = tag_ids
        if tag_names is not None:
            payload["tagNames"] = tag_names
        resp = client.post("/facilities", json=payload, headers=auth_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _create
