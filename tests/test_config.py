"""Tests for settings and the factories driven by them."""

import pytest
from pydantic import ValidationError

from shortlink.core.config import CodeStrategy, Settings, StoreBackend
from shortlink.repositories import (
    InMemoryLinkStore,
    RedisLinkStore,
    SQLLinkStore,
    build_link_store,
)


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_defaults():
    settings = make_settings()

    assert settings.CODE_LENGTH == 6
    assert len(settings.CODE_ALPHABET) == 62
    assert settings.CODE_STRATEGY == CodeStrategy.RANDOM
    assert settings.REDIRECT_STATUS_CODE == 308
    assert settings.ALLOWED_SCHEMES == ["http", "https"]


def test_comma_separated_lists():
    settings = make_settings(CORS_ORIGINS="https://a.example, https://b.example", ALLOWED_SCHEMES="HTTP,Https")

    assert settings.CORS_ORIGINS == ["https://a.example", "https://b.example"]
    assert settings.ALLOWED_SCHEMES == ["http", "https"]


def test_database_uri():
    settings = make_settings(POSTGRES_USER="u", POSTGRES_PASSWORD="p", POSTGRES_SERVER="db", POSTGRES_DB="links")
    assert settings.SQLALCHEMY_DATABASE_URI == "postgresql+asyncpg://u:p@db:5432/links"

    override = make_settings(DATABASE_URL="sqlite+aiosqlite:///:memory:")
    assert override.SQLALCHEMY_DATABASE_URI == "sqlite+aiosqlite:///:memory:"

    assert make_settings(DATABASE_URL="").DATABASE_URL is None


def test_redis_uri():
    assert make_settings(REDIS_HOST="cache", REDIS_DB=2).REDIS_URI == "redis://cache:6379/2"
    assert make_settings(REDIS_PASSWORD="secret").REDIS_URI == "redis://:secret@localhost:6379/0"


@pytest.mark.parametrize("overrides", [
    {"CODE_LENGTH": 0},
    {"CODE_MAX_ATTEMPTS": 0},
    {"CODE_ALPHABET": "zzzz"},
    {"REDIRECT_STATUS_CODE": 200},
    {"STORE_BACKEND": "filesystem"},
])
def test_invalid_settings(overrides):
    with pytest.raises(ValidationError):
        make_settings(**overrides)


@pytest.mark.parametrize("backend,expected", [
    (StoreBackend.MEMORY, InMemoryLinkStore),
    (StoreBackend.DATABASE, SQLLinkStore),
    (StoreBackend.REDIS, RedisLinkStore),
])
def test_build_link_store(backend, expected):
    settings = make_settings(STORE_BACKEND=backend, DATABASE_URL="sqlite+aiosqlite:///:memory:")
    assert isinstance(build_link_store(settings), expected)
