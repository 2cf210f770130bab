"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


_DEFAULT_SEED_PATH = str(Path(__file__).resolve().parent.parent / "data" / "ted_talks.json")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Talk Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file written in addition to the console.
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))

    # Path or connection string for the SQLite database.  If a relative
    # path is provided, it will be resolved relative to the project root
    # by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "talk_catalog.db")

    # Destructive: when set, every talk is deleted and the dataset at
    # ``seed_data_path`` is loaded again during startup.
    reset_db: bool = _env_flag("RESET_DB")
    seed_data_path: str = os.getenv("SEED_DATA_PATH", _DEFAULT_SEED_PATH)

    min_password_length: int = 8


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
