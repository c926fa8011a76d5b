"""In-process link store."""

import asyncio
from typing import Dict

from shortlink.models.link import Link
from shortlink.repositories.base import CodeNotFoundError, DuplicateCodeError, LinkStore


class InMemoryLinkStore(LinkStore):
    """
    Link store backed by a dictionary.

    Writes are serialized with an asyncio lock so the existence check and
    the insert form a single step; lookups read the dictionary directly.
    Contents are lost when the process exits.
    """

    def __init__(self):
        self._links: Dict[str, Link] = {}
        self._lock = asyncio.Lock()

    async def put(self, code: str, target_url: str) -> Link:
        async with self._lock:
            if code in self._links:
                raise DuplicateCodeError(code)
            link = Link(code=code, target_url=target_url)
            self._links[code] = link
            return link

    async def get(self, code: str) -> Link:
        link = self._links.get(code)
        if link is None:
            raise CodeNotFoundError(code)
        return link

    async def exists(self, code: str) -> bool:
        return code in self._links

    def __len__(self) -> int:
        return len(self._links)
