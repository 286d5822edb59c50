"""Tests for the mapping of errors to HTTP responses."""
import re

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from catering_platform.catering_platform.catering_service.config import settings
from catering_platform.catering_platform.catering_service.error_handlers import (
    generate_request_id,
    register_exception_handlers,
)
from catering_platform.catering_platform.catering_service.exceptions import (
    BusinessRuleViolationError,
    DatabaseError,
    ExternalServiceError,
    ResourceNotFoundError,
    ValidationError,
)

REQUEST_ID = re.compile(r"^REQ_[0-9a-f]{16}_\d+$")


@pytest.fixture
def error_client():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/not-found")
    def not_found():
        raise ResourceNotFoundError("Facility", 3)

    @app.get("/rule")
    def rule():
        raise BusinessRuleViolationError("capacity", "too many guests", {"password": "hunter2"})

    @app.get("/database")
    def database():
        raise DatabaseError("INSERT", "facilities", "UNIQUE constraint failed")

    @app.get("/external")
    def external():
        raise ExternalServiceError("mailer", "send_welcome", "timeout")

    @app.get("/validation")
    def validation():
        raise ValidationError({"name": "Name is required"})

    @app.get("/crash")
    def crash():
        raise RuntimeError("secret internals")

    @app.get("/typed")
    def typed(count: int):
        return {"count": count}

    return TestClient(app, raise_server_exceptions=False)


def test_request_id_format():
    assert REQUEST_ID.match(generate_request_id())


def test_not_found_in_production(error_client):
    resp = error_client.get("/not-found")
    assert resp.status_code == 404
    assert resp.json() == {
        "error": "Facility with identifier '3' not found",
        "error_type": "resource_not_found",
        "error_code": "RESOURCE_NOT_FOUND",
    }


def test_details_only_in_development(error_client, monkeypatch):
    monkeypatch.setattr(settings, "APP_ENV", "development")
    body = error_client.get("/rule").json()
    assert body["error_code"] == "BUSINESS_RULE_VIOLATION"
    assert body["details"]["rule"] == "capacity"
    assert body["details"]["password"] == "[REDACTED]"


@pytest.mark.parametrize("path", ["/database", "/external"])
def test_server_side_errors_are_generic_in_production(error_client, path):
    resp = error_client.get(path)
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "An internal error occurred"
    assert "details" not in body
    assert REQUEST_ID.match(body["request_id"])


def test_server_side_errors_show_message_in_development(error_client, monkeypatch):
    monkeypatch.setattr(settings, "APP_ENV", "development")
    body = error_client.get("/database").json()
    assert "UNIQUE constraint failed" in body["error"]
    assert body["details"]["table"] == "facilities"


def test_validation_error_lists_fields(error_client):
    resp = error_client.get("/validation")
    assert resp.status_code == 400
    assert resp.json()["details"] == {"name": "Name is required"}
    assert resp.json()["error_type"] == "validation_error"


def test_request_validation_maps_to_400(error_client):
    resp = error_client.get("/typed", params={"count": "many"})
    assert resp.status_code == 400
    assert "count" in resp.json()["details"]


def test_unhandled_exception(error_client, monkeypatch):
    body = error_client.get("/crash").json()
    assert body["error"] == "An internal error occurred"
    assert body["error_type"] == "internal_error"
    assert "secret internals" not in str(body)

    monkeypatch.setattr(settings, "APP_ENV", "development")
    dev_body = error_client.get("/crash").json()
    assert dev_body["details"] == {"exception_class": "RuntimeError", "message": "secret internals"}


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}
