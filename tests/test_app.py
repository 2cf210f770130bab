"""
Application-level behaviour: discovery, store guard, CORS and startup.
"""
import warnings

from fastapi.testclient import TestClient

from talk_catalog_api.app.core.config import settings
from talk_catalog_api.app.main import create_app


def test_root_lists_endpoints(client):
    resp = client.get("/")

    assert resp.status_code == 200
    routes = {route["path"]: route["methods"] for route in resp.json()}
    assert routes["/"] == ["GET"]
    assert routes["/register"] == ["POST"]
    assert routes["/login"] == ["POST"]
    assert routes["/top10Views"] == ["GET"]
    assert routes["/speaker/{talk_id}"] == ["GET"]


def test_store_unavailable_returns_503(client, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "missing" / "talks.db"))

    resp = client.post("/login", json={"username": "ada", "password": "lovelace1815"})

    assert resp.status_code == 503
    assert resp.json() == {"error": "Service unavailable"}


def test_cors_allows_any_origin(client):
    resp = client.get("/", headers={"Origin": "http://localhost:3000"})
    assert resp.headers["access-control-allow-origin"] == "*"


def test_startup_without_reset_keeps_catalog_empty(db_path, monkeypatch):
    monkeypatch.setattr(settings, "reset_db", False)

    with TestClient(create_app()) as client:
        token = client.post(
            "/register", json={"username": "ada", "password": "lovelace1815"}
        ).json()["response"]["accessToken"]
        resp = client.get("/top10Views", headers={"Authorization": token})

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "body": []}


def test_app_startup_uses_lifespan_handler():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        create_app()

    assert not [w for w in caught if "on_event" in str(w.message)]
