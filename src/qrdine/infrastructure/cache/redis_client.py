from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

import redis

DEFAULT_TIMEOUT_SECONDS = 1.0
HEALTH_CHECK_INTERVAL_SECONDS = 30


@dataclass(frozen=True)
class RedisSettings:
    url: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> RedisSettings:
        url = os.getenv("REDIS_URL")
        if not url:
            raise RuntimeError("REDIS_URL is not set")
        return cls(url=url, timeout_seconds=timeout_seconds)


@lru_cache(maxsize=8)
def _build_client(settings: RedisSettings) -> redis.Redis:
    # Menu cache entries and event envelopes are JSON text, so decode on read.
    return redis.Redis.from_url(
        settings.url,
        socket_connect_timeout=settings.timeout_seconds,
        socket_timeout=settings.timeout_seconds,
        health_check_interval=HEALTH_CHECK_INTERVAL_SECONDS,
        decode_responses=True,
    )


def get_redis_client(timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> redis.Redis:
    return _build_client(RedisSettings.from_env(timeout_seconds))


def ping_redis(timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> bool:
    try:
        return bool(get_redis_client(timeout_seconds).ping())
    except (redis.RedisError, RuntimeError):
        return False
