"""
Slug Routes — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    ├── mock_db_session: AsyncMock session for resolver unit tests (no DB)
    ├── engine:          aiosqlite engine on a per-test file, tables created
    ├── db_session:      AsyncSession bound to `engine`
    ├── seeded_session:  db_session with the example Article and User rows
    └── test_client:     HTTPX AsyncClient against create_app(), with
                         get_db_session overridden to use `engine`
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Set before any slug_routes import: settings and the module engine read these
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="slug_routes_test_"), "app.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from slug_routes.database import Base, get_db_session
from slug_routes.models.article import Article
from slug_routes.models.user import User


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value = make_result(record)
        await resolver("hello-world", mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_result():
    """Builds the object `await session.execute(...)` returns, yielding `record` from scalars().first()."""

    def _make(record):
        result = MagicMock()
        result.scalars.return_value.first.return_value = record
        return result

    return _make


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_session(db_session):
    """Article {id:1, slug:"hello-world"} and User {id:42}."""
    db_session.add_all(
        [
            Article(id=1, slug="hello-world", title="Hello, World", body="First post"),
            Article(id=2, slug="second-post", title="Second", body="More words"),
            User(id=42, name="Ada", email="ada@example.com"),
        ]
    )
    await db_session.commit()
    return db_session


@pytest_asyncio.fixture
async def test_client(engine, seeded_session):
    """
    HTTPX AsyncClient talking to a fresh app whose sessions come from `engine`.

    Does not follow redirects, so fallback redirects can be asserted.
    """
    from slug_routes.main import create_app

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_session():
        async with factory() as session:
            yield session

    app = create_app()
    app.dependency_overrides[get_db_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
