"""Redirect service: resolves short codes to their target URLs."""

import logging

from shortlink.models.link import Link
from shortlink.repositories.base import CodeNotFoundError, LinkStore, RepositoryError
from shortlink.services.exceptions import LinkLookupError, LinkNotFoundError

logger = logging.getLogger(__name__)


class RedirectService:
    """Read-only lookups against the link store."""

    def __init__(self, store: LinkStore):
        self.store = store

    async def get_link(self, code: str) -> Link:
        """
        Retrieve the Link issued under ``code``.

        Raises:
            LinkNotFoundError: If the code was never issued
            LinkLookupError: If the store fails
        """
        try:
            return await self.store.get(code)
        except CodeNotFoundError as e:
            raise LinkNotFoundError(f"Link with code '{code}' not found") from e
        except RepositoryError as e:
            logger.error(f"Error retrieving link by code: {e}")
            raise LinkLookupError(f"Failed to retrieve link with code '{code}'") from e

    async def resolve(self, code: str) -> str:
        """Return the target URL for ``code``."""
        link = await self.get_link(code)
        return link.target_url
