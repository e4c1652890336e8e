"""
Test configuration for the Toolkit Service.

This module provides fixtures for an isolated database per test, the query
and mutation layers bound to it, and an HTTP client for route tests.
"""

import os

from dotenv import load_dotenv

# Explicitly load the test environment variables at the very start.
dotenv_path = os.path.join(os.path.dirname(__file__), "..", ".env.test")
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path=dotenv_path, override=True)

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import AsyncAdaptedQueuePool

from toolkit_service.crud.tools import ToolMutations, ToolQueries
from toolkit_service.db import get_db, get_session_factory
from toolkit_service.main import app as fastapi_app
from toolkit_service.models import Base, User

# Set TEST_DATABASE_URL to run against PostgreSQL; otherwise each test gets
# its own SQLite file.
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL")

# Ensure the root_path is set to empty string for tests
fastapi_app.root_path = ""


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """
    Engine with a freshly created schema.

    A single pooled connection serializes the sessions that bulk operations
    and stats open concurrently, which SQLite needs to avoid lock errors.
    """
    url = TEST_DATABASE_URL or f"sqlite+aiosqlite:///{tmp_path / 'toolkit_test.db'}"
    test_engine = create_async_engine(
        url,
        poolclass=AsyncAdaptedQueuePool,
        pool_size=1,
        max_overflow=0,
    )
    if test_engine.dialect.name == "sqlite":
        event.listen(test_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def queries(session_factory) -> ToolQueries:
    return ToolQueries(session_factory)


@pytest_asyncio.fixture
async def mutations(session_factory) -> ToolMutations:
    return ToolMutations(session_factory)


@pytest_asyncio.fixture
async def test_user(session_factory) -> User:
    """A user row that `created_by` can reference."""
    user = User(email="creator@example.com", role="regular")
    async with session_factory() as session:
        session.add(user)
        await session.commit()
    return user


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an HTTP client for making requests to the FastAPI app.
    The store dependencies are overridden to use the isolated test database.
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_session_factory] = lambda: session_factory
    fastapi_app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def unreachable_session_factory(
    tmp_path,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory whose SQLite file sits in a directory that does not exist."""
    broken_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'toolkit.db'}"
    )
    yield async_sessionmaker(bind=broken_engine, class_=AsyncSession, expire_on_commit=False)
    await broken_engine.dispose()
