"""Create the forum schema and seed the category taxonomy.

Usage:
    loop-init-db [--drop] [--database-url URL]
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from loop_forum.core.logging import configure_logging
from loop_forum.core.settings import settings
from loop_forum.db.seed import seed_categories
from loop_forum.db.session import build_engine, build_session_factory, create_tables, drop_tables

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="Database URL (defaults to DATABASE_URL)",
    )
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop all tables before creating them",
    )
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    engine = build_engine(args.database_url, echo=settings.sql_debug)
    try:
        if args.drop:
            logger.warning("Dropping all tables in %s", engine.url)
            drop_tables(engine)
        create_tables(engine)
        with build_session_factory(engine)() as db:
            created = seed_categories(db)
    finally:
        engine.dispose()

    logger.info("Database ready at %s (%d categories added)", engine.url, created)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
