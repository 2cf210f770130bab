"""Entry point for the Talk Catalog API server.

Launches the FastAPI application with Uvicorn.  Host and port come
from ``HOST`` and ``PORT`` (defaults ``0.0.0.0`` and ``8080``); set
``RESET_DB=true`` to reload the talk dataset during startup.

Usage:
    PORT=9000 python run.py
"""
import logging

from uvicorn import Config, Server

from talk_catalog_api.app.core.config import settings
from talk_catalog_api.app.main import app


def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info(
        "Server running on http://localhost:%d", settings.port
    )
    server.run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
