"""
Business logic for accounts.

Accounts are created on registration and only ever read afterwards.
Store errors (for example the UNIQUE constraint on ``username``) are
propagated to the caller unchanged so the API layer can surface the
store's own message.
"""

import logging
from typing import Optional

from talk_catalog_api.app.core.db import get_connection
from talk_catalog_api.app.core.security import (
    generate_access_token,
    hash_password,
    verify_password,
)
from talk_catalog_api.app.schemas.user import AccountRead, Credentials


logger = logging.getLogger(__name__)


def _row_to_account(row) -> AccountRead:
    return AccountRead(id=row["id"], username=row["username"], access_token=row["access_token"])


class UserService:
    """Create, authenticate and look up accounts."""

    @classmethod
    async def create_user(cls, data: Credentials) -> AccountRead:
        """Insert a new account and return it with its access token.

        The password is stored as a salted hash.  The token is
        generated here once and never changes afterwards.
        """
        hashed = hash_password(data.password)
        token = generate_access_token()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO users (username, password, access_token) VALUES (?, ?, ?)",
                (data.username, hashed, token),
            )
            user_id = cursor.lastrowid
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
        logger.info("Registered user %s (id=%s)", data.username, user_id)
        return AccountRead(id=user_id, username=data.username, access_token=token)

    @classmethod
    async def authenticate(cls, username: str, password: str) -> Optional[AccountRead]:
        """Authenticate an account by username and password.

        Returns ``AccountRead`` if the credentials match, otherwise
        ``None``.
        """
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, username, password, access_token FROM users WHERE username = ?",
                (username,),
            ).fetchone()
        finally:
            conn.close()
        if row and verify_password(password, row["password"]):
            return _row_to_account(row)
        logger.info("Failed login for %s", username)
        return None

    @classmethod
    async def get_by_token(cls, token: str) -> Optional[AccountRead]:
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, username, access_token FROM users WHERE access_token = ?",
                (token,),
            ).fetchone()
        finally:
            conn.close()
        return _row_to_account(row) if row else None
