"""Shared test fixtures - uses async SQLite for isolated testing."""

import os

# In-memory SQLite for tests (no Docker needed); set before the app reads settings
TEST_DATABASE_URL = "sqlite+aiosqlite:///file::memory:?cache=shared&uri=true"
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from gamegraph.db.database import Base, enable_sqlite_savepoints, get_db  # noqa: E402
from gamegraph.models import Game, User  # noqa: E402
from gamegraph.services.recommendation_service import (  # noqa: E402
    RecommendationService,
    get_recommendation_service,
)
from tests.fakes import FakeRedis  # noqa: E402

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
enable_sqlite_savepoints(test_engine)
test_session_factory = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)


async def _override_get_db():
    async with test_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@pytest.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db():
    """Direct async DB session for service-level tests."""
    async with test_session_factory() as session:
        yield session
        await session.commit()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
async def client(fake_redis):
    """Async HTTP test client with test DB and fake Redis overrides."""
    from gamegraph.main import app

    async def _override_get_recommendation_service():
        return RecommendationService(fake_redis)

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_recommendation_service] = _override_get_recommendation_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def graph():
    """Seed users and games directly; returns a helper that commits rows."""
    async def _add(users=(), games=()):
        async with test_session_factory() as session:
            for user_id in users:
                session.add(User(id=user_id, name=user_id.title()))
            for game_id in games:
                session.add(Game(id=game_id, name=game_id.removeprefix("gid-").title()))
            await session.commit()

    return _add
