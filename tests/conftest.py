"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - db_manager is patched so get_db and the readiness check use the test engine
    - Settings never point at a real PostgreSQL instance

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route and gateway tests
      (PostgreSQL-specific behavior such as asyncpg timeouts is not exercised here)
    - Route tests go through httpx ASGITransport: same ASGI stack as production,
      lifespan not run (db_manager injected instead)
"""

import os

os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient  # noqa: E402

from blog_api.db.base import Base  # noqa: E402
from blog_api.infrastructure.database import DatabaseSessionManager  # noqa: E402
from blog_api.infrastructure.persistence_gateway import SqlAlchemyGateway  # noqa: E402
import blog_api.infrastructure.database as db_module  # noqa: E402
import blog_api.models  # noqa: E402,F401
from blog_api.main import app  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def gateway(test_db):
    return SqlAlchemyGateway(test_db)


@pytest.fixture
def test_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the in-memory test engine."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(test_manager, monkeypatch):
    """FastAPI test client whose get_db dependency draws from the test engine."""
    monkeypatch.setattr(db_module, "db_manager", test_manager)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def alice(client):
    """Alice created through the API; returns the response body."""
    res = await client.post(
        "/user", json={"email": "alice@example.com", "name": "Alice"},
    )
    assert res.status_code == 200
    return res.json()
