#!/usr/bin/env python3
"""
Reload the talk catalog in the Talk Catalog SQLite database.

This DELETES every talk currently stored and inserts the records from
the given JSON dataset.  Accounts are not touched.

Usage:
    python seed_talks.py --db ./talk_catalog.db
    python seed_talks.py --db ./talk_catalog.db --data ./my_talks.json
"""

import argparse
import sys

from talk_catalog_api.app.core.config import settings
from talk_catalog_api.app.core.db import init_db
from talk_catalog_api.app.core.logging_config import setup_logging
from talk_catalog_api.app.services.talk_service import TalkService


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Reload the talk catalog (SQLite).")
    ap.add_argument("--db", default=settings.database_url, help="Path to SQLite DB file (default: DATABASE_URL)")
    ap.add_argument("--data", default=settings.seed_data_path, help="Path to the JSON talk dataset")
    args = ap.parse_args(argv)

    setup_logging(settings.log_level, settings.log_file)
    settings.database_url = args.db
    init_db()
    try:
        count = TalkService.reset_talks(args.data)
    except (OSError, ValueError) as exc:
        print(f"[!] Could not load {args.data}: {exc}", file=sys.stderr)
        return 1
    print(f"[+] Loaded {count} talks into {args.db}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
