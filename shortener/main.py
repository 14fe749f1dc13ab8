from fastapi import FastAPI
from contextlib import asynccontextmanager
from shortener.core.config import settings
from shortener.core.exceptions import PersistenceError
from shortener.db.sql.connection import build_engine, build_session_factory, safe_url
from shortener.db.sql.init_db import init_database
from shortener.routes.monitoring import monitoring_router
from shortener.routes.urls import url_router
from shortener.services.url_store import URLStore
import uvicorn
import logging

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("🚀 Starting URL Shortener service...")
    engine = build_engine(settings)
    try:
        await init_database(engine)
    except PersistenceError as e:
        logger.error(f"❌ Failed to initialize database: {e}")
        await engine.dispose()
        raise
    logger.info(f"Connected to database {safe_url(engine)}")

    app.state.engine = engine
    app.state.url_store = URLStore(
        build_session_factory(engine),
        max_attempts=settings.max_id_attempts,
    )
    logger.info(f"Listening on: {settings.host}:{settings.port}")

    yield

    # Shutdown
    logger.info("🛑 Shutting down URL Shortener service...")
    await engine.dispose()

app = FastAPI(
    title="URL Shortener API",
    description="Shortens URLs and redirects short ids back to them",
    version="1.0.0",
    lifespan=lifespan
)

@app.get("/")
async def root():
    return {"message": "URL Shortener API", "version": "1.0.0", "status": "running"}

app.include_router(monitoring_router)
# Shorten and redirect routes - the /{short_id} catch-all must be last
app.include_router(url_router, tags=["URLs"])

def run():
    uvicorn.run(app, host=settings.host, port=settings.port)

if __name__ == "__main__":
    run()
