"""Session management for database operations.

This module provides a transaction context for SQLAlchemy async sessions
with commit on success and rollback on error.
"""

from typing import AsyncGenerator
import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


@asynccontextmanager
async def transaction_context(
    session_factory: async_sessionmaker,
) -> AsyncGenerator[AsyncSession, None]:
    """Context manager for a database session with transaction support.

    Automatically commits on successful completion or rolls back on error.

    Yields:
        AsyncSession: SQLAlchemy async session

    Example:
        ```python
        async with transaction_context(session_factory) as session:
            session.add(Link(code="aZ3kQ1", target_url="https://example.com"))
            # Commits automatically on context exit if no errors
        ```
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
