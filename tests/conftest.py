"""Test fixtures for the pastebin application."""

import os

# Settings are read once at import time, so configure them before importing the app
os.environ["ENVIRONMENT"] = "testing"
os.environ["TEST_MODE"] = "true"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["LOG_FILE_ENABLED"] = "false"
os.environ["BASE_URL"] = "http://testserver"

import pytest
import pytest_asyncio
from typing import AsyncGenerator, Generator
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from app.api.dependencies import get_paste_storage
from app.main import app as main_app
# Import models to ensure they're registered with SQLModel metadata
from app.models.paste import Paste  # noqa: F401
from app.storage import DatabasePasteStorage, InMemoryPasteStorage, RedisPasteStorage
from tests.utils import MockRedis


# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with in-memory SQLite."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create isolated test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def mock_redis() -> MockRedis:
    """Mock Redis for testing."""
    return MockRedis()


@pytest_asyncio.fixture(params=["memory", "database", "redis"])
async def paste_storage(request, test_engine, mock_redis):
    """Every storage backend, each with its own empty medium."""
    if request.param == "memory":
        storage = InMemoryPasteStorage()
    elif request.param == "database":
        storage = DatabasePasteStorage(engine=test_engine)
    else:
        storage = RedisPasteStorage(client=mock_redis)

    await storage.initialize()
    yield storage


@pytest.fixture
def memory_storage() -> InMemoryPasteStorage:
    """Fresh in-memory storage for API tests."""
    return InMemoryPasteStorage()


@pytest.fixture
def test_app(memory_storage) -> Generator[FastAPI, None, None]:
    """Create FastAPI test app with overridden dependencies."""
    app = main_app
    app.dependency_overrides[get_paste_storage] = lambda: memory_storage
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """Return FastAPI TestClient instance."""
    with TestClient(test_app) as test_client:
        yield test_client
