"""
Redis Cache Tests - Career Compass
tests/test_redis_cache.py

Tests for Redis caching functionality including cache hits,
misses, key prefixing and graceful degradation.
"""
import pytest
import redis
from unittest.mock import patch, MagicMock
from pydantic import BaseModel

from career_compass.services.redis_cache import RedisCache, KEY_PREFIX
from career_compass.services.cache import get_cache, reset_cache


class MockModel(BaseModel):
    """Mock Pydantic model for testing."""
    id: str
    name: str


class TestRedisCache:
    """Tests for the RedisCache class."""

    def test_redis_cache_init(self):
        """Client is built from the configured URL."""
        with patch('career_compass.services.redis_cache.redis.from_url') as mock_from_url:
            cache = RedisCache(url="redis://cache:6379/0")
            mock_from_url.assert_called_once_with(
                "redis://cache:6379/0", decode_responses=True, socket_connect_timeout=5)
            assert cache.client is not None

    def test_cache_set_and_get(self):
        """Test setting and getting cached values under the prefix."""
        with patch('career_compass.services.redis_cache.redis.from_url') as mock_from_url:
            mock_client = MagicMock()
            mock_from_url.return_value = mock_client

            cache = RedisCache()
            model = MockModel(id="123", name="Test")

            cache.set("analysis:123", model, 300)
            mock_client.setex.assert_called_once_with(
                f"{KEY_PREFIX}:analysis:123",
                300,
                model.model_dump_json()
            )

            mock_client.get.return_value = model.model_dump_json()
            result = cache.get("analysis:123", MockModel)
            mock_client.get.assert_called_once_with(f"{KEY_PREFIX}:analysis:123")
            assert result == model

    def test_cache_get_miss(self):
        """Test cache miss returns None."""
        with patch('career_compass.services.redis_cache.redis.from_url') as mock_from_url:
            mock_client = MagicMock()
            mock_client.get.return_value = None
            mock_from_url.return_value = mock_client

            cache = RedisCache()
            assert cache.get("nonexistent:key", MockModel) is None

    def test_cache_delete(self):
        """Test deleting a cache entry."""
        with patch('career_compass.services.redis_cache.redis.from_url') as mock_from_url:
            mock_client = MagicMock()
            mock_from_url.return_value = mock_client

            cache = RedisCache(prefix="test")
            cache.delete("survey:models")
            mock_client.delete.assert_called_once_with("test:survey:models")

    def test_empty_prefix_uses_bare_key(self):
        with patch('career_compass.services.redis_cache.redis.from_url') as mock_from_url:
            mock_client = MagicMock()
            mock_from_url.return_value = mock_client

            RedisCache(prefix="").delete("k")
            mock_client.delete.assert_called_once_with("k")


class TestCacheSingleton:
    """Tests for the cache singleton."""

    def setup_method(self):
        reset_cache()

    def teardown_method(self):
        reset_cache()

    def test_get_cache_returns_singleton(self):
        with patch('career_compass.services.redis_cache.redis.from_url') as mock_from_url:
            mock_from_url.return_value = MagicMock()
            first = get_cache()
            second = get_cache()
            assert first is not None
            assert first is second
            mock_from_url.assert_called_once()

    def test_get_cache_unavailable_returns_none(self):
        """Redis down means no cache, not an error."""
        with patch('career_compass.services.redis_cache.redis.from_url') as mock_from_url:
            mock_client = MagicMock()
            mock_client.ping.side_effect = redis.ConnectionError("refused")
            mock_from_url.return_value = mock_client
            assert get_cache() is None

    def test_reset_cache(self):
        with patch('career_compass.services.redis_cache.redis.from_url') as mock_from_url:
            mock_from_url.return_value = MagicMock()
            first = get_cache()
            reset_cache()
            assert get_cache() is not first


@pytest.mark.parametrize("ttl", [60, 3600, 86400])
def test_ttl_passed_through(ttl):
    with patch('career_compass.services.redis_cache.redis.from_url') as mock_from_url:
        mock_client = MagicMock()
        mock_from_url.return_value = mock_client
        RedisCache().set("k", MockModel(id="1", name="n"), ttl)
        assert mock_client.setex.call_args.args[1] == ttl
