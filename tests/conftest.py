"""
Shared fixtures.

Every test gets its own SQLite file under ``tmp_path``; the talk
dataset bundled with the package is loaded at startup.
"""
import pytest
from fastapi.testclient import TestClient

from talk_catalog_api.app.core.config import settings
from talk_catalog_api.app.main import create_app


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "talk_catalog.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    monkeypatch.setattr(settings, "reset_db", True)
    return path


@pytest.fixture
def client(db_path):
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def account(client):
    """A registered account: the ``response`` part of the register reply."""
    resp = client.post("/register", json={"username": "ada", "password": "lovelace1815"})
    assert resp.status_code == 201
    return resp.json()["response"]


@pytest.fixture
def auth_headers(account):
    return {"Authorization": account["accessToken"]}
