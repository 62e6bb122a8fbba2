from __future__ import annotations

import logging

import redis

from qrdine.application.ports.publisher import EventPublisher
from qrdine.infrastructure.cache.redis_client import get_redis_client

logger = logging.getLogger(__name__)


class RedisEventPublisher(EventPublisher):
    """Redis pub/sub. A channel with no subscribers is not an error."""

    def __init__(self, client: redis.Redis | None = None, timeout_seconds: float = 1.0) -> None:
        self._client = client
        self._timeout_seconds = timeout_seconds

    def publish(self, channel: str, message: str) -> None:
        client = self._client or get_redis_client(timeout_seconds=self._timeout_seconds)
        receivers = client.publish(channel, message)
        logger.debug("event_published", extra={"channel": channel, "receivers": receivers})
