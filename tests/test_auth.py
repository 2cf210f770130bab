"""
Tests for account registration, login and the token check.
"""
import sqlite3

import pytest

from talk_catalog_api.app.core.db import get_connection
from talk_catalog_api.app.services.user_service import UserService


def count_users() -> int:
    conn = get_connection()
    try:
        return conn.execute("SELECT COUNT(*) AS count FROM users").fetchone()["count"]
    finally:
        conn.close()


def test_register_returns_account_and_token(client):
    resp = client.post("/register", json={"username": "grace", "password": "cobol1959!"})

    assert resp.status_code == 201
    payload = resp.json()
    assert payload["success"] is True
    assert payload["response"]["username"] == "grace"
    assert isinstance(payload["response"]["id"], int)
    token = payload["response"]["accessToken"]
    assert len(token) == 256
    int(token, 16)


@pytest.mark.parametrize("password", ["", "a", "1234567"])
def test_register_rejects_short_password(client, password):
    resp = client.post("/register", json={"username": "shorty", "password": password})

    assert resp.status_code == 400
    assert resp.json() == {
        "success": False,
        "response": "Password needs to be at least 8 characters long",
    }
    assert count_users() == 0


def test_register_accepts_exactly_eight_characters(client):
    resp = client.post("/register", json={"username": "edge", "password": "12345678"})
    assert resp.status_code == 201


def test_duplicate_username_is_rejected_and_first_token_kept(client, account):
    resp = client.post("/register", json={"username": "ada", "password": "another-password"})

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert "UNIQUE constraint failed" in body["response"]
    assert count_users() == 1

    login = client.post("/login", json={"username": "ada", "password": "lovelace1815"})
    assert login.json()["response"]["accessToken"] == account["accessToken"]


def test_register_missing_password_is_bad_request(client):
    resp = client.post("/register", json={"username": "nopass"})

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert "password" in body["response"]


def test_register_empty_username_is_bad_request(client):
    resp = client.post("/register", json={"username": "", "password": "longenough1"})

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert "username" in body["response"]
    assert count_users() == 0


@pytest.mark.parametrize("path", ["/register", "/login"])
@pytest.mark.parametrize(
    "raw_body",
    [
        r'{"username": "u1", "password": "abcdefgh\ud800"}',
        r'{"username": "u\udfff", "password": "abcdefgh1"}',
    ],
)
def test_unencodable_credentials_are_bad_request(client, path, raw_body):
    resp = client.post(path, content=raw_body, headers={"Content-Type": "application/json"})

    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert count_users() == 0


def test_password_is_stored_hashed(client, account):
    conn = get_connection()
    try:
        row = conn.execute("SELECT password FROM users WHERE username = ?", ("ada",)).fetchone()
    finally:
        conn.close()
    assert row["password"] != "lovelace1815"
    assert "$" in row["password"]


def test_login_returns_registration_token(client, account):
    resp = client.post("/login", json={"username": "ada", "password": "lovelace1815"})

    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "response": {
            "id": account["id"],
            "username": "ada",
            "accessToken": account["accessToken"],
        },
    }


@pytest.mark.parametrize(
    "username, password",
    [("ada", "wrong-password"), ("nobody", "lovelace1815")],
)
def test_login_with_bad_credentials(client, account, username, password):
    resp = client.post("/login", json={"username": username, "password": password})

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "response": "Credentials didn't match"}


def test_login_store_failure_is_server_error(client, monkeypatch):
    async def broken(cls, username, password):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(UserService, "authenticate", classmethod(broken))

    resp = client.post("/login", json={"username": "ada", "password": "lovelace1815"})

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "response": "disk I/O error"}


def test_token_check_store_failure_is_bad_request(client, auth_headers, monkeypatch):
    async def broken(cls, token):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(UserService, "get_by_token", classmethod(broken))

    resp = client.get("/top10Views", headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "response": "database is locked"}
