"""
Create the diary tables in the Supabase Postgres database.

Usage: python -m app.db.init_db
"""
import asyncio
import logging

from app.core.database import create_engine_from_settings
from app.db.base import Base
import app.db.models  # noqa: F401  registers the tables on Base.metadata

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    engine = create_engine_from_settings()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Created tables: {', '.join(sorted(Base.metadata.tables))}")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    asyncio.run(create_tables())
