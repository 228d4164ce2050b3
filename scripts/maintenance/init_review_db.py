"""
Create (or reset) the review record tables.

--reset is DANGEROUS: it deletes every stored review record in every
namespace. Only use it when you want to start fresh.

Usage:
    python -m scripts.maintenance.init_review_db [--db-url URL] [--reset] [--yes]
"""

from __future__ import annotations

import argparse
from typing import Optional

from loguru import logger

from srs.logging import setup_logging
from srs.sm2 import NAMESPACES
from srs.sm2.database import SqlRecordStore, get_engine, init_db, reset_db


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Initialize the review record database")
    parser.add_argument("--db-url", help="SQLAlchemy URL (defaults to DATABASE_URL)")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables")
    parser.add_argument("--yes", action="store_true", help="Skip the reset confirmation")
    parser.add_argument("--log-level", default=None, help="Override SRS_LOG_LEVEL")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    engine = get_engine(args.db_url)

    if args.reset:
        if not args.yes:
            print("This will DELETE all review records (ease, intervals, counters).")
            response = input("Are you sure you want to reset? (type 'yes' to confirm): ")
            if response.lower() != "yes":
                print("Cancelled. No changes made.")
                return 1
        reset_db(engine)
        logger.info("Review database reset")
    else:
        init_db(engine)
        logger.info("Review database ready")

    store = SqlRecordStore(engine=engine, create_tables=False)
    for content_type, namespace in NAMESPACES.items():
        print(f"{content_type:<8} {namespace:<26} {store.count(namespace)} records")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
