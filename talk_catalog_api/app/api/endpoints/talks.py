"""
Talk catalog endpoints.

Both routes require a valid access token in the ``Authorization``
header (see ``core.security.get_current_user``).
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException, Path, status

from talk_catalog_api.app.core.security import get_current_user
from talk_catalog_api.app.schemas.talk import TalkListResponse, TalkResponse
from talk_catalog_api.app.schemas.user import AccountRead, ErrorResponse
from talk_catalog_api.app.services.talk_service import TalkService


logger = logging.getLogger(__name__)

# Range of a SQLite INTEGER; larger ids cannot be bound to a query.
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
}


@router.get("/top10Views", response_model=TalkListResponse, responses=_ERROR_RESPONSES)
async def top_ten_views(current_user: AccountRead = Depends(get_current_user)) -> TalkListResponse:
    """Return the ten most viewed talks, highest view count first."""
    try:
        talks = await TalkService.top_by_views()
    except sqlite3.Error as exc:
        logger.error("Top views query failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Bad request")
    return TalkListResponse(body=talks)


@router.get(
    "/speaker/{talk_id}",
    response_model=TalkResponse,
    responses={**_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
)
async def get_talk(
    talk_id: int = Path(..., ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX),
    current_user: AccountRead = Depends(get_current_user),
) -> TalkResponse:
    """Return the talk whose ``talk_id`` matches the path, or 404."""
    try:
        talk = await TalkService.get_talk(talk_id)
    except sqlite3.Error as exc:
        logger.error("Talk lookup for %s failed: %s", talk_id, exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Bad request")
    if talk is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Talk not found")
    return TalkResponse(body=talk)
