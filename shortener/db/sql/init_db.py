"""Database initialization module."""
import asyncio
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from shortener.core.config import settings
from shortener.core.exceptions import PersistenceError
from shortener.db.sql.connection import Base, build_engine, safe_url
from shortener.db.sql.models import UrlMapping  # noqa: F401  registers the table on Base.metadata

logger = logging.getLogger(__name__)

async def create_tables(engine: AsyncEngine):
    """Create the urls table if it does not exist yet."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
        raise PersistenceError(f"Could not create tables on {safe_url(engine)}: {e}") from e

async def init_database(engine: AsyncEngine):
    """Initialize the database by creating tables."""
    logger.info("🔄 Initializing database...")
    await create_tables(engine)
    logger.info(f"✅ Database ready at {safe_url(engine)}")

async def _main():
    engine = build_engine(settings)
    try:
        await init_database(engine)
    finally:
        await engine.dispose()

if __name__ == "__main__":
    # Run initialization directly
    print("🔄 Initializing database tables...")
    try:
        asyncio.run(_main())
        print("✅ Database initialization completed successfully!")
    except PersistenceError as e:
        print(f"❌ Database initialization failed: {e}")
        import sys
        sys.exit(1)
