"""
Happy Thoughts API — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── sample_thought: An unsaved Thought instance
    ├── test_engine: aiosqlite engine on a temporary file with the schema created
    ├── session_factory: Sessions bound to test_engine
    └── test_client: HTTPX AsyncClient against the app, sessions from test_engine
"""

import os
import tempfile
from datetime import datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Settings are read at import time; point them at a throwaway SQLite file
# before anything from thoughts_api is imported
_tmp_dir = tempfile.mkdtemp(prefix="thoughts_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmp_dir}/app.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SEED_DATABASE"] = "false"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from thoughts_api.database import Base, get_db_session  # noqa: E402
from thoughts_api.models.thought import Thought  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = thought
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_thought():
    return Thought(
        id=uuid4(),
        message="Sunny Sunday with nothing planned",
        hearts=3,
        created_at=datetime.now(timezone.utc),
    )


# ══════════════════════════════════════════════════════════════════════════
# Database-backed fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """
    A fresh SQLite database per test.

    NullPool gives every session its own connection, so concurrent requests
    really do run as separate transactions.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'thoughts.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    get_db_session is overridden to hand out sessions from the test engine,
    with the same commit/rollback behavior as the real dependency.
    """
    from thoughts_api.main import app

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def created_thought(test_client):
    """A thought created through the API; returns the response JSON."""
    response = await test_client.post("/thoughts", json={"message": "Berlin baby"})
    assert response.status_code == 201
    return response.json()
