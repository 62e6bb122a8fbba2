from __future__ import annotations

import os

import redis

from qrdine.application.ports.cache import CacheStore
from qrdine.infrastructure.cache.redis_client import get_redis_client

KEY_PREFIX = "qrdine:"


def menu_cache_ttl_seconds() -> int:
    return int(os.getenv("MENU_CACHE_TTL_SECONDS", "300"))


class RedisCacheStore(CacheStore):
    def __init__(self, client: redis.Redis | None = None, timeout_seconds: float = 1.0) -> None:
        self._client = client
        self._timeout_seconds = timeout_seconds

    def get(self, key: str) -> str | None:
        value = self._redis().get(KEY_PREFIX + key)
        return str(value) if value is not None else None

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._redis().set(name=KEY_PREFIX + key, value=value, ex=ttl_seconds)

    def delete(self, key: str) -> None:
        self._redis().delete(KEY_PREFIX + key)

    def _redis(self) -> redis.Redis:
        return self._client or get_redis_client(timeout_seconds=self._timeout_seconds)
