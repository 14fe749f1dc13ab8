from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from shortener.core.config import Settings
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()

# Connection Pool Sizing Strategy:
# Rule of thumb: pool_size = expected concurrent requests / instances
# Total connections = instances * (pool_size + max_overflow), keep below max_connections

def build_engine(settings: Settings) -> AsyncEngine:
    """Create the single long-lived engine (and its connection pool) for the service."""
    url = make_url(settings.database_url)
    if url.get_backend_name() == "sqlite":
        # SQLite picks its own pool class; sizing options do not apply
        return create_async_engine(url, future=True, echo=False)

    return create_async_engine(
        url,
        future=True,
        echo=False,
        pool_size=settings.db_pool_size,  # Base pool size per instance
        max_overflow=settings.db_max_overflow,  # Additional connections under load
        pool_pre_ping=True,  # Verify connections before use (prevents stale connections)
        pool_recycle=settings.db_pool_recycle,
        pool_timeout=settings.db_pool_timeout,
        connect_args={
            "server_settings": {
                "application_name": f"url_shortener_{settings.instance_id or 'default'}",
            },
        },
    )

def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,
    )

def get_engine(request: Request) -> AsyncEngine:
    """Dependency for FastAPI routes - the engine opened during application startup."""
    return request.app.state.engine

def safe_url(engine: AsyncEngine) -> str:
    return engine.url.render_as_string(hide_password=True)


# --- Connection Pool Monitoring ---
def get_pool_status(engine: AsyncEngine) -> dict:
    """Get current connection pool status for monitoring."""
    try:
        pool = engine.pool
        return {
            "pool_class": type(pool).__name__,
            "pool_size": pool.size(),
            "checked_in": pool.checkedin(),
            "checked_out": pool.checkedout(),
            "overflow": pool.overflow(),
            "total": pool.size() + pool.overflow(),
        }
    except AttributeError as e:
        # NullPool / StaticPool do not track sizes
        logger.debug(f"Pool status unavailable: {e}")
        return {"pool_class": type(engine.pool).__name__, "error": str(e)}
