"""
Account endpoints.

``/register`` creates an account and hands back its access token;
``/login`` returns the same token when the credentials match.  Both
accept ``{"username", "password"}`` bodies.
"""

import logging
import sqlite3

from fastapi import APIRouter, HTTPException, status

from talk_catalog_api.app.core.config import settings
from talk_catalog_api.app.schemas.user import AccountResponse, Credentials, ErrorResponse
from talk_catalog_api.app.services.user_service import UserService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def register(credentials: Credentials) -> AccountResponse:
    """Register a new account.

    Passwords shorter than ``settings.min_password_length`` are
    rejected before anything is stored.  A duplicate username is
    rejected by the store's UNIQUE constraint and its message is
    returned as is.
    """
    if len(credentials.password) < settings.min_password_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password needs to be at least {settings.min_password_length} characters long",
        )
    try:
        account = await UserService.create_user(credentials)
    except sqlite3.Error as exc:
        logger.info("Registration of %s rejected: %s", credentials.username, exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return AccountResponse(response=account)


@router.post(
    "/login",
    response_model=AccountResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def login(credentials: Credentials) -> AccountResponse:
    """Exchange username and password for the account's access token."""
    try:
        account = await UserService.authenticate(credentials.username, credentials.password)
    except sqlite3.Error as exc:
        logger.error("Login lookup failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
    if account is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Credentials didn't match")
    return AccountResponse(response=account)
