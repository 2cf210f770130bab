"""
Security helpers for password hashing and access token checks.

Passwords are hashed with PBKDF2‑HMAC using SHA‑256 and a random
per‑password salt.  Access tokens are opaque random strings issued once
when an account is created; they never expire and are looked up
directly in the ``users`` table on every protected request.
"""

import hashlib
import hmac
import logging
import os
import secrets
import sqlite3
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

from ..schemas.user import AccountRead


logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000
TOKEN_BYTES = 128


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The
    resulting string contains the salt and hash separated by a
    ``$`` (salt in hex, then hash in hex).

    Parameters
    ----------
    password : str
        The plain text password to hash.

    Returns
    -------
    str
        Salt and hash concatenated with ``$``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored salt+hash string.

    Recomputes the PBKDF2‑HMAC digest with the stored salt and compares
    it using constant‑time comparison.  A malformed stored value never
    matches.
    """
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


def generate_access_token() -> str:
    """Return a new opaque access token (hex encoded random bytes)."""
    return secrets.token_hex(TOKEN_BYTES)


def _extract_token(header_value: Optional[str]) -> Optional[str]:
    if not header_value:
        return None
    value = header_value.strip()
    # Clients following the bearer convention send "Bearer <token>".
    scheme, _, credentials = value.partition(" ")
    if scheme.lower() == "bearer":
        return credentials.strip() or None
    return value or None


authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


async def get_current_user(authorization: Optional[str] = Depends(authorization_header)) -> AccountRead:
    """Dependency that retrieves the account owning the request's token.

    The token is read from the ``Authorization`` header.  A missing
    header or a token that matches no account results in HTTP 401.
    Store errors during the lookup result in HTTP 400 carrying the
    error text.
    """
    from talk_catalog_api.app.services.user_service import UserService

    token = _extract_token(authorization)
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Please log in")
    try:
        user = await UserService.get_by_token(token)
    except sqlite3.Error as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if user is None:
        logger.info("Rejected request with unknown access token")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Please log in")
    return user
