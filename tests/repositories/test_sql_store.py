"""Tests for the SQL link store."""

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from shortlink.models.link import Link
from shortlink.repositories.base import CodeNotFoundError, DuplicateCodeError
from tests.utils import random_url


@pytest.mark.repository
class TestSQLLinkStore:
    """Test suite for the SQL store."""

    @pytest.mark.asyncio
    async def test_put_and_get(self, sql_store):
        url = random_url()

        created = await sql_store.put("abc123", url)

        assert created.id is not None
        assert created.code == "abc123"

        fetched = await sql_store.get("abc123")
        assert fetched.id == created.id
        assert fetched.target_url == url
        assert fetched.created_at is not None

    @pytest.mark.asyncio
    async def test_created_at_is_timezone_aware(self, sql_store):
        """Links carry an aware UTC timestamp and are accepted by the database."""
        created = await sql_store.put("tz0001", "https://example.com")

        assert created.created_at.tzinfo is not None
        assert created.created_at.utcoffset() == timedelta(0)
        assert (await sql_store.get("tz0001")).created_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_code(self, sql_store):
        """The unique constraint is reported as DuplicateCodeError."""
        await sql_store.put("dup001", "https://first.example.com")

        with pytest.raises(DuplicateCodeError):
            await sql_store.put("dup001", "https://second.example.com")

        fetched = await sql_store.get("dup001")
        assert fetched.target_url == "https://first.example.com"

        async with sql_store.session_factory() as db:
            result = await db.execute(select(func.count()).select_from(Link).where(Link.code == "dup001"))
            assert result.scalar_one() == 1

    @pytest.mark.asyncio
    async def test_store_usable_after_duplicate(self, sql_store):
        await sql_store.put("dup002", random_url())
        with pytest.raises(DuplicateCodeError):
            await sql_store.put("dup002", random_url())

        link = await sql_store.put("fresh1", "https://example.com")
        assert (await sql_store.get("fresh1")).target_url == link.target_url

    @pytest.mark.asyncio
    async def test_get_missing(self, sql_store):
        with pytest.raises(CodeNotFoundError):
            await sql_store.get("missing")

    @pytest.mark.asyncio
    async def test_codes_are_case_sensitive(self, sql_store):
        await sql_store.put("AbC123", "https://upper.example.com")
        await sql_store.put("abc123", "https://lower.example.com")

        assert (await sql_store.get("AbC123")).target_url == "https://upper.example.com"
        assert (await sql_store.get("abc123")).target_url == "https://lower.example.com"

    @pytest.mark.asyncio
    async def test_exists(self, sql_store):
        assert await sql_store.exists("abc123") is False
        await sql_store.put("abc123", random_url())
        assert await sql_store.exists("abc123") is True

    @pytest.mark.asyncio
    async def test_ping(self, sql_store):
        assert await sql_store.ping() is True

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, sql_store):
        await sql_store.put("keep01", "https://example.com")
        await sql_store.initialize()

        assert await sql_store.exists("keep01") is True
