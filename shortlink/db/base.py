"""Database base configuration for SQLAlchemy with SQLModel.

This module provides base database configuration for async SQLAlchemy with SQLModel.
It includes:
- Engine configuration per environment
- Session factory setup
- Schema creation
"""

from typing import Any, Dict
import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool
from sqlmodel import SQLModel

from shortlink.core.config import Settings

logger = logging.getLogger(__name__)


def get_engine_config(settings: Settings) -> Dict[str, Any]:
    """Get the engine configuration for the configured database and environment.

    Returns:
        Dict: Engine configuration parameters.
    """
    url = make_url(settings.SQLALCHEMY_DATABASE_URI)

    if url.get_backend_name() == "sqlite":
        # A single shared connection keeps in-memory databases alive
        # across sessions.
        return {
            "echo": settings.DB_ECHO,
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }

    if settings.ENVIRONMENT.value == "testing":
        return {"echo": False, "poolclass": NullPool}

    return {
        "echo": settings.DB_ECHO,
        "pool_size": settings.POSTGRES_POOL_SIZE,
        "max_overflow": settings.POSTGRES_POOL_MAX_OVERFLOW,
        "pool_timeout": settings.POSTGRES_POOL_TIMEOUT,
        "pool_recycle": settings.POSTGRES_POOL_RECYCLE,
        "pool_pre_ping": True,
    }


def get_engine(settings: Settings) -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine.

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    engine_url = settings.SQLALCHEMY_DATABASE_URI
    logger.info(
        "Creating database engine with URL: %s",
        make_url(engine_url).render_as_string(hide_password=True),
    )
    return create_async_engine(engine_url, **get_engine_config(settings))


def get_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Build the async session factory bound to ``engine``."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables registered on the SQLModel metadata."""
    # Import models so they are registered with the metadata
    from shortlink.models import Link  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
