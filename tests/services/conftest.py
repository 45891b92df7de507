"""Service test fixtures — async DB, seeded identities and FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file (tmp_path)
    - get_db dependency overridden to use the test session factory
    - db_manager patched so readiness probes hit the test engine

Design Decisions:
    - File-backed SQLite instead of :memory: so concurrent sessions get their own
      connections and serialize on the database write lock, as real writers do
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from townsquare.db.base import Base
from townsquare.infrastructure.database import get_db, DatabaseSessionManager
from townsquare.services.author_resolver import AuthorResolver
from townsquare.services.social_graph import SocialGraph
import townsquare.infrastructure.database as db_module
import townsquare.models  # noqa: F401
from townsquare.main import app
from tests.services.helpers import make_content_store, register_identity


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'townsquare.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
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
async def bob(test_db):
    return await register_identity(test_db, "bob", "1")


@pytest.fixture
async def carol(test_db):
    return await register_identity(test_db, "carol", "2")


@pytest.fixture
def content_store(test_db):
    return make_content_store(test_db)


@pytest.fixture
def social_graph(test_db):
    return SocialGraph(test_db, AuthorResolver(test_db))


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
