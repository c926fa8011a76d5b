"""Test fixtures for the link shortening service."""

import random
from typing import Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from shortlink.app_factory import create_app
from shortlink.core.config import Settings
from shortlink.db.base import create_schema
from shortlink.repositories.memory import InMemoryLinkStore
from shortlink.repositories.redis import RedisLinkStore
from shortlink.repositories.sql import SQLLinkStore
from shortlink.services.codegen import RandomCodeGenerator
from shortlink.services.redirect import RedirectService
from shortlink.services.shortener import ShorteningService


# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and .env files."""
    return Settings(
        _env_file=None,
        ENVIRONMENT="testing",
        DEBUG=True,
        BASE_URL="http://testserver",
        STORE_BACKEND="memory",
        LOG_LEVEL="WARNING",
        LOG_FILE_ENABLED=False,
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so generated codes are reproducible."""
    return random.Random(1234)


@pytest.fixture
def generator(rng) -> RandomCodeGenerator:
    return RandomCodeGenerator(length=6, rng=rng)


@pytest.fixture
def memory_store() -> InMemoryLinkStore:
    return InMemoryLinkStore()


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with in-memory SQLite."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def sql_store(test_engine) -> SQLLinkStore:
    return SQLLinkStore(test_engine)


class MockRedis:
    """In-process stand-in for the subset of redis.asyncio.Redis the store uses."""

    def __init__(self):
        self.data = {}
        self.available = True
        self.closed = False

    def _check(self):
        if not self.available:
            raise RedisConnectionError("Connection refused")

    async def get(self, key):
        self._check()
        return self.data.get(key)

    async def set(self, key, value, ex=None, nx=False):
        self._check()
        if nx and key in self.data:
            return None
        self.data[key] = value
        return True

    async def exists(self, *keys):
        self._check()
        return sum(1 for key in keys if key in self.data)

    async def ping(self):
        self._check()
        return True

    async def aclose(self):
        self.closed = True


@pytest.fixture
def mock_redis() -> MockRedis:
    return MockRedis()


@pytest.fixture
def redis_store(mock_redis) -> RedisLinkStore:
    return RedisLinkStore(mock_redis, key_prefix="test:link:")


@pytest.fixture
def shortening_service(memory_store, generator) -> ShorteningService:
    return ShorteningService(store=memory_store, generator=generator)


@pytest.fixture
def redirect_service(memory_store) -> RedirectService:
    return RedirectService(store=memory_store)


@pytest.fixture
def test_app(test_settings, memory_store, generator) -> FastAPI:
    """Create FastAPI test app wired to the in-memory store."""
    return create_app(settings=test_settings, store=memory_store, generator=generator)


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """Return FastAPI TestClient instance."""
    with TestClient(test_app, follow_redirects=False) as test_client:
        yield test_client
