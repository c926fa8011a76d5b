"""Base link store interface.

This module defines the LinkStore contract shared by every storage backend,
together with the repository exception hierarchy.
"""

from abc import ABC, abstractmethod

from shortlink.models.link import Link


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class CodeNotFoundError(RepositoryError):
    """Exception raised when no link exists for a code."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Link with code={code} not found")


class DuplicateCodeError(RepositoryError):
    """Exception raised when a code is already taken."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Link with code={code} already exists")


class LinkStore(ABC):
    """
    Persistent mapping of short codes to target URLs.

    Implementations must make ``put`` an atomic check-and-insert: when two
    callers race for the same code exactly one of them succeeds and the
    other receives DuplicateCodeError. Reads never take the write path.
    """

    @abstractmethod
    async def put(self, code: str, target_url: str) -> Link:
        """
        Store a new link.

        Args:
            code: The short code to claim
            target_url: The validated URL the code should resolve to

        Returns:
            The created Link

        Raises:
            DuplicateCodeError: If the code is already taken
            RepositoryError: On backend failures
        """

    @abstractmethod
    async def get(self, code: str) -> Link:
        """
        Look up a link by its code.

        Raises:
            CodeNotFoundError: If no link exists for the code
            RepositoryError: On backend failures
        """

    async def exists(self, code: str) -> bool:
        """Check whether a code has already been issued."""
        try:
            await self.get(code)
        except CodeNotFoundError:
            return False
        return True

    async def initialize(self) -> None:
        """Prepare the backend (create schema, open connections)."""

    async def close(self) -> None:
        """Release backend resources."""

    async def ping(self) -> bool:
        """Report whether the backend is reachable."""
        return True
