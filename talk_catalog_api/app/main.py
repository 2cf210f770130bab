"""
Main entrypoint for the Talk Catalog API.

This module assembles the FastAPI application, sets up logging,
installs the store availability guard and the JSON error envelope, and
includes the API router.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time as
``app``.  Run it with uvicorn or another ASGI server, e.g.::

    uvicorn talk_catalog_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router
from .core import db
from .core.config import settings
from .core.logging_config import setup_logging
from .services.talk_service import TalkService


logger = logging.getLogger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Creates the database file if it does not exist and brings the
        # schema up to date before the optional catalog reload.
        db.init_db()
        if settings.reset_db:
            TalkService.reset_talks(settings.seed_data_path)
        yield

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)

    # Refuse every request while the store cannot be reached.
    @app.middleware("http")
    async def require_store(request: Request, call_next):
        if not db.is_available():
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"error": "Service unavailable"},
            )
        return await call_next(request)

    # Must stay outermost so 503 responses carry CORS headers.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "response": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _format_validation_errors(exc)
        logger.info("Rejected malformed request to %s: %s", request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "response": message},
        )

    app.include_router(router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
