"""Create all tables on the configured database."""

from __future__ import annotations

import argparse
import asyncio
import logging

from sqlalchemy import inspect

from core.config import settings
from core.middleware.logging import setup_logging
from database.engine import Base, close_db, db_engine, init_db

logger = logging.getLogger("scripts.init_db")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create database tables")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing tables before creating them",
    )
    return parser.parse_args(argv)


async def run(drop: bool = False) -> list[str]:
    if drop:
        import database.models  # noqa: F401

        async with db_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.warning("Dropped all tables")

    await init_db()

    async with db_engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

    await close_db()
    return sorted(t for t in tables if t != "alembic_version")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(log_level=settings.log_level, json_logs=False)

    tables = asyncio.run(run(drop=args.drop))
    print(f"Database ready at {settings.database_url.split('@')[-1]}")
    for table in tables:
        print(f"  {table}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
