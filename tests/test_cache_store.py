"""
Tests for the content cache backends.
"""
import json
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.core.exceptions import StorageError
from app.domain.schemas.presentation import PresentationRequest
from app.infrastructure.cache import (
    FileCacheStore,
    InMemoryCacheStore,
    RedisCacheStore,
    derive_cache_key,
)


class TestDeriveCacheKey:
    """Test cache key derivation."""

    def test_ignores_additional_info_and_style(self):
        a = PresentationRequest(theme="AI", slide_count=5, audience="Students", additional_info="x", style="dark")
        b = PresentationRequest(theme="AI", slide_count=5, audience="Students", additional_info="y", style="light")

        assert derive_cache_key(a) == derive_cache_key(b)

    def test_differs_on_slide_count(self):
        a = PresentationRequest(theme="AI", slide_count=5)
        b = PresentationRequest(theme="AI", slide_count=6)

        assert derive_cache_key(a) != derive_cache_key(b)

    def test_replaces_non_alphanumerics_and_lowercases(self):
        request = PresentationRequest(theme="Climate Change!", slide_count=3, audience="High-School")

        assert derive_cache_key(request) == "climate_change__3_high_school"

    def test_non_ascii_letters_are_replaced(self):
        request = PresentationRequest(theme="Климат", slide_count=2, audience="All")

        assert derive_cache_key(request) == "_______2_all"


class TestInMemoryCacheStore:
    """Test the in-process cache."""

    @pytest.mark.asyncio
    async def test_miss_then_hit(self, sample_presentation):
        cache = InMemoryCacheStore()

        assert await cache.get("k") is None
        await cache.put("k", sample_presentation)

        assert "k" in cache
        assert len(cache) == 1
        assert await cache.get("k") == sample_presentation


class TestFileCacheStore:
    """Test the file-backed cache."""

    @pytest.mark.asyncio
    async def test_round_trip(self, tmp_path, sample_presentation):
        cache = FileCacheStore(tmp_path / "cache")

        await cache.put("climate_2_all", sample_presentation)

        assert (tmp_path / "cache" / "climate_2_all.json").exists()
        assert await cache.get("climate_2_all") == sample_presentation

    @pytest.mark.asyncio
    async def test_entry_uses_camel_case_keys(self, tmp_path, sample_presentation):
        cache = FileCacheStore(tmp_path)
        await cache.put("k", sample_presentation)

        payload = json.loads((tmp_path / "k.json").read_text(encoding="utf-8"))

        assert "bulletPoints" in payload["slides"][1]
        assert "visualElements" in payload["slides"][1]

    @pytest.mark.asyncio
    async def test_missing_entry_is_miss(self, tmp_path):
        assert await FileCacheStore(tmp_path).get("absent") is None

    @pytest.mark.asyncio
    async def test_corrupt_entry_is_miss(self, tmp_path):
        (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")

        assert await FileCacheStore(tmp_path).get("broken") is None

    @pytest.mark.asyncio
    async def test_write_failure_raises_storage_error(self, tmp_path, sample_presentation):
        cache = FileCacheStore(tmp_path)
        # A directory in place of the entry file makes the write fail
        (tmp_path / "taken.json").mkdir()

        with pytest.raises(StorageError):
            await cache.put("taken", sample_presentation)


class TestRedisCacheStore:
    """Test the Redis cache with a mocked client."""

    @pytest.fixture
    def client(self):
        return AsyncMock()

    @pytest.mark.asyncio
    async def test_put_uses_prefix_without_expiry(self, client, sample_presentation):
        cache = RedisCacheStore(client, prefix="test")

        await cache.put("k", sample_presentation)

        client.set.assert_awaited_once()
        args, kwargs = client.set.await_args
        assert args[0] == "test:k"
        assert json.loads(args[1])["title"] == "Climate Change"
        assert kwargs == {}

    @pytest.mark.asyncio
    async def test_get_hit(self, client, sample_presentation):
        client.get.return_value = json.dumps(sample_presentation.to_cache_payload())
        cache = RedisCacheStore(client)

        assert await cache.get("k") == sample_presentation
        client.get.assert_awaited_once_with("deckgen:content:k")

    @pytest.mark.asyncio
    async def test_get_miss(self, client):
        client.get.return_value = None

        assert await RedisCacheStore(client).get("k") is None

    @pytest.mark.asyncio
    async def test_get_error_is_miss(self, client):
        client.get.side_effect = RedisConnectionError("down")

        assert await RedisCacheStore(client).get("k") is None

    @pytest.mark.asyncio
    async def test_put_error_raises_storage_error(self, client, sample_presentation):
        client.set.side_effect = RedisConnectionError("down")

        with pytest.raises(StorageError):
            await RedisCacheStore(client).put("k", sample_presentation)

    @pytest.mark.asyncio
    async def test_close(self, client):
        await RedisCacheStore(client).close()

        client.aclose.assert_awaited_once()
