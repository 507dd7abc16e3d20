"""Tests for / and /health endpoints."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from shiptivity.api.app import create_app
from shiptivity.api.routes import health as health_module


def test_root_message(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {
        "message": "SHIPTIVITY API. Read documentation to see API docs"
    }


def test_health_endpoint_basic(client):
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "shiptivity-api"
    assert data["database"] == "ok"
    assert data["clients"] == 6
    assert "database_error" not in data


def test_health_endpoint_empty_database(engine):
    client = TestClient(create_app(engine))

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["clients"] == 0


def test_health_endpoint_store_error(client, monkeypatch):
    def _broken(session):
        raise OperationalError("SELECT count(*)", {}, Exception("no such table"))

    monkeypatch.setattr(health_module, "count_clients", _broken)

    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "error"
    assert "no such table" in data["database_error"]
    assert "clients" not in data


def test_app_created_without_engine_uses_configured_db(tmp_path, monkeypatch):
    db_path = tmp_path / "nested" / "clients.db"
    monkeypatch.setenv("SHIPTIVITY_DB_PATH", str(db_path))

    app = create_app()
    assert app.state.owns_engine is True

    with TestClient(app) as client:
        assert client.get("/health").json()["clients"] == 0

    assert db_path.exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
