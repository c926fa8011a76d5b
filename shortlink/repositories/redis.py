"""
Redis link store.

Links are kept as JSON strings under ``<prefix><code>``. Claiming a code uses
``SET ... NX`` so Redis itself refuses a second writer for the same key.
"""

import json
from datetime import datetime

import redis.asyncio as redis
from loguru import logger
from redis.exceptions import RedisError

from shortlink.core.config import Settings
from shortlink.models.link import Link
from shortlink.repositories.base import (
    CodeNotFoundError,
    DuplicateCodeError,
    LinkStore,
    RepositoryError,
)


class RedisLinkStore(LinkStore):
    """Link store backed by a Redis server."""

    def __init__(self, client: redis.Redis, key_prefix: str = "shortlink:link:"):
        self.client = client
        self.key_prefix = key_prefix

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisLinkStore":
        pool = redis.ConnectionPool.from_url(
            settings.REDIS_URI,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
            decode_responses=True,
        )
        logger.debug(f"Redis connection pool created for {settings.REDIS_HOST}:{settings.REDIS_PORT}")
        return cls(redis.Redis(connection_pool=pool), key_prefix=settings.REDIS_KEY_PREFIX)

    def _key(self, code: str) -> str:
        return f"{self.key_prefix}{code}"

    async def initialize(self) -> None:
        if not await self.ping():
            logger.warning("Redis is not reachable yet, link operations will fail until it is")

    async def close(self) -> None:
        await self.client.aclose()
        logger.debug("Redis connections closed")

    async def put(self, code: str, target_url: str) -> Link:
        link = Link(code=code, target_url=target_url)
        payload = json.dumps({
            "target_url": link.target_url,
            "created_at": link.created_at.isoformat(),
        })
        try:
            stored = await self.client.set(self._key(code), payload, nx=True)
        except RedisError as e:
            raise RepositoryError(f"Redis error creating link: {e}") from e
        if not stored:
            raise DuplicateCodeError(code)
        return link

    async def get(self, code: str) -> Link:
        try:
            raw = await self.client.get(self._key(code))
        except RedisError as e:
            raise RepositoryError(f"Redis error retrieving link: {e}") from e
        if raw is None:
            raise CodeNotFoundError(code)

        try:
            data = json.loads(raw)
            return Link(
                code=code,
                target_url=data["target_url"],
                created_at=datetime.fromisoformat(data["created_at"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise RepositoryError(f"Corrupt link record for code {code}: {e}") from e

    async def exists(self, code: str) -> bool:
        try:
            return bool(await self.client.exists(self._key(code)))
        except RedisError as e:
            raise RepositoryError(f"Redis error checking code existence: {e}") from e

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except (RedisError, ConnectionError) as e:
            logger.error(f"Redis ping failed: {str(e)}")
            return False
