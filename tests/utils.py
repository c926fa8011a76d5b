"""Test utilities for link shortening tests."""

import random
import string
from typing import Iterable

from shortlink.models.link import Link
from shortlink.repositories.base import DuplicateCodeError, RepositoryError
from shortlink.repositories.memory import InMemoryLinkStore
from shortlink.services.codegen import CodeGenerator


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


class ScriptedCodeGenerator(CodeGenerator):
    """Generator returning a fixed sequence of codes, for collision scenarios."""

    def __init__(self, codes: Iterable[str], max_attempts: int = 10):
        super().__init__(length=6, alphabet=string.ascii_letters + string.digits, max_attempts=max_attempts)
        self._codes = iter(codes)
        self.issued = []

    def _candidate(self, target_url: str, attempt: int) -> str:
        code = next(self._codes)
        self.issued.append(code)
        return code


class AlwaysTakenStore(InMemoryLinkStore):
    """Store reporting every code as already taken."""

    def __init__(self):
        super().__init__()
        self.put_calls = 0

    async def put(self, code: str, target_url: str) -> Link:
        self.put_calls += 1
        raise DuplicateCodeError(code)


class FailingStore(InMemoryLinkStore):
    """Store whose backend is unreachable."""

    async def put(self, code: str, target_url: str) -> Link:
        raise RepositoryError("connection refused")

    async def get(self, code: str) -> Link:
        raise RepositoryError("connection refused")

    async def ping(self) -> bool:
        return False
