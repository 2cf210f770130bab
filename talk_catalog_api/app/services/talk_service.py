"""
Service layer for the talk catalog.

The catalog is read‑only while the service runs.  Its only write path
is ``reset_talks``, which wipes the ``talks`` table and bulk‑loads a
JSON dataset in a single transaction.  The dataset is a list of
objects carrying the columns of ``TalkRead``; unknown keys are
ignored.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from talk_catalog_api.app.core.db import get_connection, get_cursor
from talk_catalog_api.app.schemas.talk import TalkRead


logger = logging.getLogger(__name__)

TOP_VIEWS_LIMIT = 10

_COLUMNS = (
    "talk_id",
    "title",
    "speaker",
    "recorded_date",
    "published_date",
    "event",
    "duration",
    "views",
    "likes",
)


def load_dataset(path: str | Path) -> List[TalkRead]:
    """Read and validate the talk dataset at ``path``.

    Raises ``ValueError`` if the file does not contain a JSON list.
    Validation errors from individual records propagate as
    ``pydantic.ValidationError``.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"Talk dataset {path} must contain a JSON list")
    return [TalkRead(**item) for item in raw]


class TalkService:
    """Read queries and the bulk reload of the talk catalog."""

    @classmethod
    async def top_by_views(cls, limit: int = TOP_VIEWS_LIMIT) -> List[TalkRead]:
        """Return up to ``limit`` talks ordered by view count, highest first.

        Ties keep insertion order.
        """
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT {', '.join(_COLUMNS)} FROM talks ORDER BY views DESC, rowid ASC LIMIT ?",
                (limit,),
            ).fetchall()
        finally:
            conn.close()
        return [TalkRead(**dict(row)) for row in rows]

    @classmethod
    async def get_talk(cls, talk_id: int) -> Optional[TalkRead]:
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {', '.join(_COLUMNS)} FROM talks WHERE talk_id = ? ORDER BY rowid LIMIT 1",
                (talk_id,),
            ).fetchone()
        finally:
            conn.close()
        return TalkRead(**dict(row)) if row else None

    @classmethod
    def reset_talks(cls, path: str | Path) -> int:
        """Delete every talk and load the dataset at ``path``.

        The dataset is parsed before anything is deleted, so a broken
        file leaves the current catalog in place.  Returns the number
        of talks inserted.
        """
        talks = load_dataset(path)
        logger.warning("Resetting talk catalog from %s", path)
        placeholders = ", ".join("?" for _ in _COLUMNS)
        with get_cursor() as cursor:
            cursor.execute("DELETE FROM talks")
            cursor.executemany(
                f"INSERT INTO talks ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                [tuple(getattr(talk, col) for col in _COLUMNS) for talk in talks],
            )
        logger.info("Loaded %d talks", len(talks))
        return len(talks)
