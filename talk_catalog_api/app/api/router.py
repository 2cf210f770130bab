"""
Top‑level router for the API.

All routes are served from the application root, so the sub‑routers
are included without a prefix.  The discovery router comes first so
``GET /`` lists itself before the other routes.
"""

from fastapi import APIRouter

from .endpoints import auth, info, talks

router = APIRouter()

router.include_router(info.router, tags=["info"])
router.include_router(auth.router, tags=["auth"])
router.include_router(talks.router, tags=["talks"])
