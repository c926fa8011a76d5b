"""SQL link store for the link shortening service.

This module provides the SQLLinkStore class for database operations related to
Link models. Uniqueness of codes is enforced by the unique constraint on
``links.code``, so concurrent inserts of the same code are arbitrated by the
database rather than by the application.
"""

import logging
from typing import Optional

from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from shortlink.core.config import Settings
from shortlink.db.base import create_schema, get_engine, get_session_factory
from shortlink.db.session import transaction_context
from shortlink.models.link import Link
from shortlink.repositories.base import (
    CodeNotFoundError,
    DuplicateCodeError,
    LinkStore,
    RepositoryError,
)

logger = logging.getLogger(__name__)


def _is_unique_violation(error: IntegrityError) -> bool:
    message = str(error).lower()
    return "unique" in message or "duplicate key" in message


class SQLLinkStore(LinkStore):
    """
    Link store backed by a SQL database through SQLAlchemy's asyncio API.

    Each operation runs in its own session; writes are committed before
    ``put`` returns.
    """

    def __init__(self, engine: AsyncEngine, session_factory: Optional[async_sessionmaker] = None):
        """
        Initialize the store.

        Args:
            engine: Async engine the store owns and disposes on close
            session_factory: Optional session factory (built from engine if omitted)
        """
        self.engine = engine
        self.session_factory = session_factory or get_session_factory(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SQLLinkStore":
        return cls(get_engine(settings))

    async def initialize(self) -> None:
        await create_schema(self.engine)
        logger.info("Database schema ready")

    async def close(self) -> None:
        await self.engine.dispose()

    async def put(self, code: str, target_url: str) -> Link:
        link = Link(code=code, target_url=target_url)
        try:
            async with transaction_context(self.session_factory) as db:
                db.add(link)
                await db.flush()
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise DuplicateCodeError(code) from e
            raise RepositoryError(f"Database error creating link: {e}") from e
        except SQLAlchemyError as e:
            raise RepositoryError(f"Database error creating link: {e}") from e
        return link

    async def get(self, code: str) -> Link:
        try:
            async with self.session_factory() as db:
                result = await db.execute(select(Link).where(Link.code == code))
                link = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error retrieving link by code: {e}") from e
        if link is None:
            raise CodeNotFoundError(code)
        return link

    async def exists(self, code: str) -> bool:
        try:
            async with self.session_factory() as db:
                result = await db.execute(select(Link.id).where(Link.code == code).limit(1))
                return result.first() is not None
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error checking code existence: {e}") from e

    async def ping(self) -> bool:
        try:
            async with self.session_factory() as db:
                result = await db.execute(text("SELECT 1"))
                return result.scalar_one() == 1
        except SQLAlchemyError as e:
            logger.error(f"Database ping failed: {e}")
            return False
