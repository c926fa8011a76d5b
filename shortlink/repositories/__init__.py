"""Link store layer for the link shortening service.

This module provides the LinkStore interface, its storage backends,
and a factory selecting the backend from settings.
"""

from shortlink.core.config import Settings, StoreBackend
from shortlink.repositories.base import (
    LinkStore,
    RepositoryError,
    CodeNotFoundError,
    DuplicateCodeError,
)
from shortlink.repositories.memory import InMemoryLinkStore
from shortlink.repositories.sql import SQLLinkStore
from shortlink.repositories.redis import RedisLinkStore


def build_link_store(settings: Settings) -> LinkStore:
    """Create the link store selected by ``STORE_BACKEND``."""
    if settings.STORE_BACKEND == StoreBackend.MEMORY:
        return InMemoryLinkStore()
    if settings.STORE_BACKEND == StoreBackend.REDIS:
        return RedisLinkStore.from_settings(settings)
    return SQLLinkStore.from_settings(settings)


__all__ = [
    # Base classes and exceptions
    "LinkStore",
    "RepositoryError",
    "CodeNotFoundError",
    "DuplicateCodeError",

    # Concrete stores
    "InMemoryLinkStore",
    "SQLLinkStore",
    "RedisLinkStore",
    "build_link_store",
]
