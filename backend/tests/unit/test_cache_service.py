# backend/tests/unit/test_cache_service.py
from datetime import datetime, timedelta
from unittest.mock import Mock

import pytest
from redis.exceptions import RedisError

from carwash.services.cache_service import CacheService, CircuitBreaker, CircuitState


@pytest.fixture
def cache() -> CacheService:
    return CacheService(use_memory=True)


class TestMemoryBackend:
    def test_set_get_delete(self, cache):
        assert cache.backend == "memory"
        assert cache.set("services:list", [{"id": "1"}]) is True
        assert cache.get("services:list") == [{"id": "1"}]
        assert cache.delete("services:list") is True
        assert cache.get("services:list") is None

        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_expired_entries_are_dropped(self, cache):
        cache.set("k", "v", ttl=60)
        cache._memory_expiry["k"] = datetime.now() - timedelta(seconds=1)
        assert cache.get("k") is None
        assert "k" not in cache._memory_cache

    def test_ping_without_redis(self, cache):
        assert cache.ping() is True


class TestRedisBackend:
    def test_values_are_json_encoded(self):
        client = Mock()
        client.get.return_value = '{"a": 1}'
        client.setex.return_value = True
        cache = CacheService(redis_client=client)

        assert cache.backend == "redis"
        assert cache.get("k") == {"a": 1}
        assert cache.set("k", {"a": 1}, ttl=10) is True
        client.setex.assert_called_once_with("k", 10, '{"a": 1}')

    def test_errors_are_counted_not_raised(self):
        client = Mock()
        client.get.side_effect = RedisError("down")
        cache = CacheService(redis_client=client)

        assert cache.get("k") is None
        assert cache.get_stats()["errors"] == 1


class TestCircuitBreaker:
    def test_opens_after_threshold(self):
        breaker = CircuitBreaker(failure_threshold=2, recovery_timeout=60)
        failing = Mock(side_effect=RedisError("boom"), __name__="failing")

        with pytest.raises(RedisError):
            breaker.call(failing)
        assert breaker.call(failing) is None
        assert breaker.state == CircuitState.OPEN

        # Open circuit skips the call entirely
        failing.reset_mock()
        assert breaker.call(failing) is None
        failing.assert_not_called()

    def test_half_open_after_recovery_timeout(self):
        breaker = CircuitBreaker(failure_threshold=1, recovery_timeout=0)
        breaker.call(Mock(side_effect=RedisError("boom"), __name__="failing"))

        assert breaker.state == CircuitState.HALF_OPEN
        assert breaker.call(Mock(return_value="ok", __name__="ok")) == "ok"
        assert breaker.state == CircuitState.CLOSED
