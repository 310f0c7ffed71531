from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)


def to_async_url(db_url: str) -> str:
    """
    Convert a Postgres URL to use asyncpg instead of psycopg2.
    """
    # If using postgresql://, convert to postgresql+asyncpg://
    if db_url.startswith('postgresql://'):
        return db_url.replace('postgresql://', 'postgresql+asyncpg://', 1)
    # If using postgres://, convert to postgresql+asyncpg://
    if db_url.startswith('postgres://'):
        return db_url.replace('postgres://', 'postgresql+asyncpg://', 1)
    return db_url


def create_engine_from_settings() -> AsyncEngine:
    """
    Create an async engine for the Supabase Postgres database.
    """
    if not settings.DATABASE_URL:
        raise RuntimeError("DATABASE_URL is not configured")

    logger.info("Using async database connection with asyncpg")
    return create_async_engine(
        to_async_url(settings.DATABASE_URL),
        future=True,
        pool_pre_ping=True,  # Verify connections before using them
    )
