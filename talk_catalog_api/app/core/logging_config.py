"""
Logging configuration for the API and the maintenance scripts.

``setup_logging`` attaches a console handler to the root logger and,
when ``LOG_FILE`` is configured, a file handler writing the same
records.  It is called by ``create_app`` and by ``seed_talks.py``;
repeated calls are no‑ops while the handlers installed by an earlier
call are still attached.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_installed: List[logging.Handler] = []


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    return handlers


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.  Unknown names fall back
        to ``INFO``.
    log_file : Optional[str]
        File to append log records to.  Missing parent directories are
        created.
    """
    root = logging.getLogger()
    if any(handler in root.handlers for handler in _installed):
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(log_file):
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _installed.append(handler)
