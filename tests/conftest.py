import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine

from shortener.db.sql.connection import build_session_factory, get_engine
from shortener.db.sql.init_db import create_tables
from shortener.routes.urls import get_url_store
from shortener.services.url_store import URLStore

# --- PostgreSQL stand-in (SQLite file, one per test) ---
@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'shortener.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()

@pytest.fixture
def store(engine):
    return URLStore(build_session_factory(engine))

@pytest_asyncio.fixture
async def client(engine, store):
    from shortener.main import app as fastapi_app

    fastapi_app.dependency_overrides[get_url_store] = lambda: store
    fastapi_app.dependency_overrides[get_engine] = lambda: engine

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as c:
        yield c

    fastapi_app.dependency_overrides.clear()
