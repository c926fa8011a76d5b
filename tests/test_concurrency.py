"""Concurrency tests for issuing short codes."""

import asyncio
import random

import pytest

from shortlink.repositories.base import DuplicateCodeError
from shortlink.services.codegen import RandomCodeGenerator
from shortlink.services.exceptions import CodeGenerationExhaustedError
from shortlink.services.redirect import RedirectService
from shortlink.services.shortener import ShorteningService
from tests.utils import ScriptedCodeGenerator


@pytest.mark.asyncio
async def test_concurrent_creates_issue_unique_codes(shortening_service, redirect_service):
    """Simultaneous submissions each get their own resolvable code."""
    urls = [f"https://example{n}.com/page" for n in range(200)]

    codes = await asyncio.gather(*(shortening_service.create(url) for url in urls))

    assert len(set(codes)) == len(urls)
    for code, url in zip(codes, urls):
        assert await redirect_service.resolve(code) == url


@pytest.mark.asyncio
async def test_small_code_space_never_reuses_a_code(memory_store):
    """With only four possible codes, extra submissions fail instead of overwriting."""
    generator = RandomCodeGenerator(length=2, alphabet="ab", max_attempts=200, rng=random.Random(0))
    service = ShorteningService(store=memory_store, generator=generator, max_attempts=50)
    urls = [f"https://example{n}.com" for n in range(10)]

    results = await asyncio.gather(*(service.create(url) for url in urls), return_exceptions=True)

    codes = [r for r in results if isinstance(r, str)]
    failures = [r for r in results if isinstance(r, CodeGenerationExhaustedError)]

    assert sorted(codes) == ["aa", "ab", "ba", "bb"]
    assert len(failures) == 6
    assert len(memory_store) == 4

    resolver = RedirectService(memory_store)
    for code, url in zip(results, urls):
        if isinstance(code, str):
            assert await resolver.resolve(code) == url


@pytest.mark.asyncio
async def test_services_racing_for_the_same_code(memory_store):
    """Two services proposing the same code end up with distinct codes."""
    first = ShorteningService(store=memory_store, generator=ScriptedCodeGenerator(["shared", "first1"]))
    second = ShorteningService(store=memory_store, generator=ScriptedCodeGenerator(["shared", "second"]))

    codes = await asyncio.gather(
        first.create("https://first.example.com"),
        second.create("https://second.example.com"),
    )

    assert len(set(codes)) == 2
    assert "shared" in codes
    assert len(memory_store) == 2


@pytest.mark.asyncio
async def test_redis_store_same_code_race(redis_store):
    results = await asyncio.gather(
        *(redis_store.put("race01", f"https://example{n}.com") for n in range(10)),
        return_exceptions=True
    )

    assert sum(1 for r in results if not isinstance(r, Exception)) == 1
    assert sum(1 for r in results if isinstance(r, DuplicateCodeError)) == 9
