# backend/carwash/services/cache_service.py
"""
Cache service for the car-wash platform.

Wraps a Redis client with an in-memory fallback. Development and test
runs always use the in-memory store; elsewhere Redis is tried first and
the fallback kicks in when it is unreachable. The cache is wired at
startup and reported by the health check. No business operation reads
from it.
"""

from datetime import datetime, timedelta
from enum import Enum
import json
import logging
import threading
from typing import Any, Callable, Dict, Optional, TypeVar

import redis
from redis import Redis
from redis.exceptions import RedisError

from ..core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"  # Normal operation
    OPEN = "open"  # Failing, reject calls
    HALF_OPEN = "half_open"  # Testing if service recovered


class CircuitBreaker:
    """
    Circuit breaker for cache calls.

    After ``failure_threshold`` consecutive failures calls are skipped
    until ``recovery_timeout`` seconds have passed.
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        recovery_timeout: int = 60,
        expected_exception: type[BaseException] = RedisError,
    ) -> None:
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.expected_exception = expected_exception

        self._failure_count: int = 0
        self._last_failure_time: Optional[datetime] = None
        self._state: CircuitState = CircuitState.CLOSED
        self._lock = threading.Lock()

    @property
    def state(self) -> CircuitState:
        with self._lock:
            if self._state == CircuitState.OPEN and self._last_failure_time:
                elapsed = (datetime.now() - self._last_failure_time).total_seconds()
                if elapsed >= self.recovery_timeout:
                    self._state = CircuitState.HALF_OPEN
            return self._state

    def call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> Optional[T]:
        """
        Execute ``func`` unless the circuit is open.

        Returns None when the call is skipped or fails after the circuit opens.
        """
        if self.state == CircuitState.OPEN:
            logger.warning(f"Circuit breaker is OPEN, skipping {func.__name__}")
            return None

        try:
            result = func(*args, **kwargs)
            self._on_success()
            return result
        except self.expected_exception:
            self._on_failure()
            if self.state == CircuitState.CLOSED:
                # Still under threshold, propagate error
                raise
            return None

    def _on_success(self) -> None:
        with self._lock:
            self._failure_count = 0
            if self._state == CircuitState.HALF_OPEN:
                self._state = CircuitState.CLOSED
                logger.info("Circuit breaker recovered, closing circuit")

    def _on_failure(self) -> None:
        with self._lock:
            self._failure_count += 1
            self._last_failure_time = datetime.now()
            if self._failure_count >= self.failure_threshold:
                self._state = CircuitState.OPEN
                logger.warning(f"Circuit breaker opened after {self._failure_count} failures")


class CacheService:
    """Key/value cache with JSON serialization and TTLs."""

    def __init__(self, redis_client: Optional[Redis] = None, use_memory: Optional[bool] = None):
        self.circuit_breaker = CircuitBreaker()
        self._memory_cache: Dict[str, Any] = {}
        self._memory_expiry: Dict[str, datetime] = {}
        self._stats: Dict[str, int] = {"hits": 0, "misses": 0, "sets": 0, "deletes": 0, "errors": 0}

        self.redis: Optional[Redis] = redis_client
        if use_memory is None:
            use_memory = settings.use_memory_cache and redis_client is None
        if not use_memory and self.redis is None:
            self._connect()

    def _connect(self) -> None:
        try:
            self.redis = redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                retry_on_timeout=True,
            )
            self.redis.ping()
            logger.info("Connected to Redis")
        except (RedisError, ConnectionError) as e:
            logger.error(f"Redis not available: {e}. Using in-memory fallback.")
            self.redis = None

    @property
    def backend(self) -> str:
        return "redis" if self.redis is not None else "memory"

    def get(self, key: str) -> Optional[Any]:
        redis_client = self.redis
        try:
            if redis_client is not None:
                raw = self.circuit_breaker.call(redis_client.get, key)
                if raw is not None:
                    self._stats["hits"] += 1
                    return json.loads(raw)
            elif key in self._memory_cache:
                expires_at = self._memory_expiry.get(key)
                if expires_at is None or datetime.now() < expires_at:
                    self._stats["hits"] += 1
                    return self._memory_cache[key]
                # Expired
                self._memory_cache.pop(key, None)
                self._memory_expiry.pop(key, None)
        except (RedisError, ValueError) as e:
            logger.error(f"Cache get error for key {key}: {e}")
            self._stats["errors"] += 1
            return None

        self._stats["misses"] += 1
        return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        ttl = ttl or settings.cache_ttl
        redis_client = self.redis
        try:
            if redis_client is not None:
                result = self.circuit_breaker.call(
                    redis_client.setex, key, ttl, json.dumps(value, default=str)
                )
                if not result:
                    return False
            else:
                self._memory_cache[key] = value
                self._memory_expiry[key] = datetime.now() + timedelta(seconds=ttl)
        except RedisError as e:
            logger.error(f"Cache set error for key {key}: {e}")
            self._stats["errors"] += 1
            return False

        self._stats["sets"] += 1
        return True

    def delete(self, key: str) -> bool:
        redis_client = self.redis
        try:
            if redis_client is not None:
                deleted = bool(self.circuit_breaker.call(redis_client.delete, key))
            else:
                deleted = self._memory_cache.pop(key, None) is not None
                self._memory_expiry.pop(key, None)
        except RedisError as e:
            logger.error(f"Cache delete error for key {key}: {e}")
            self._stats["errors"] += 1
            return False

        if deleted:
            self._stats["deletes"] += 1
        return deleted

    def ping(self) -> bool:
        if self.redis is None:
            return True
        try:
            return bool(self.redis.ping())
        except RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    def get_stats(self) -> Dict[str, Any]:
        return {
            **self._stats,
            "backend": self.backend,
            "circuit_state": self.circuit_breaker.state.value,
        }


_cache_service: Optional[CacheService] = None


def get_cache_service() -> CacheService:
    """Process-wide cache instance, created on first use."""
    global _cache_service
    if _cache_service is None:
        _cache_service = CacheService()
    return _cache_service
