"""Tests for application wiring: health, errors and startup."""

import logging
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from catalog_api.config import Settings
from catalog_api.main import create_app
from catalog_api.models.category import Category
from catalog_api.services.category_service import CategoryService


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["uptime"] >= 0
    assert datetime.fromisoformat(body["timestamp"])


def test_root_and_api_info(client):
    assert client.get("/").json()["health"] == "/api/health"

    info = client.get("/api").json()
    assert set(info["endpoints"]) == {"health", "attributes", "categories", "products"}


def test_unknown_route(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"error": "Route not found"}


def test_wrong_method_uses_error_envelope(client):
    response = client.post("/api/attributes")

    assert response.status_code == 405
    assert "error" in response.json()


def test_storage_failure_is_generic_500(client, monkeypatch):
    def fail(self, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(CategoryService, "get_tree", fail)

    response = client.get("/api/categories/tree")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_debug_mode_includes_message(monkeypatch):
    def fail(self, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(CategoryService, "get_tree", fail)
    app = create_app(Settings(database_url="sqlite://", debug=True))

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/categories/tree")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "message": "boom"}


def test_seeding_is_skipped_when_disabled():
    app = create_app(Settings(database_url="sqlite://", seed_on_startup=False))

    with TestClient(app) as client:
        body = client.get("/api/categories/tree").json()

    assert body == {"data": [], "total": 0}


def test_seeding_runs_once(app, client, db):
    from catalog_api.data.sample_catalog import ensure_sample_catalog

    assert ensure_sample_catalog(db) is False
    assert db.query(Category).count() == 8


@pytest.mark.parametrize("origin", ["http://localhost:5173"])
def test_cors_allows_client_origin(client, origin):
    response = client.get("/api/health", headers={"Origin": origin})

    assert response.headers["access-control-allow-origin"] == origin


def test_server_error_keeps_cors_headers(client, monkeypatch):
    def fail(self, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(CategoryService, "get_tree", fail)

    response = client.get(
        "/api/categories/tree", headers={"Origin": "http://localhost:5173"}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_server_error_is_logged_as_request(client, monkeypatch, caplog):
    def fail(self, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(CategoryService, "get_tree", fail)
    caplog.set_level(logging.INFO, logger="catalog_api.main")

    client.get("/api/categories/tree")

    messages = [record.getMessage() for record in caplog.records]
    assert any("GET /api/categories/tree -> 500" in message for message in messages)
    assert any(record.levelno == logging.ERROR and record.exc_info for record in caplog.records)


@pytest.mark.parametrize("path", ["/api/health", "/api/nothing-here"])
def test_security_headers(client, path):
    response = client.get(path)

    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "SAMEORIGIN"
    assert response.headers["referrer-policy"] == "no-referrer"
