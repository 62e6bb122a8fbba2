"""Outbound order event stream.

Every order creation and status change is published as one JSON envelope
on ``ORDER_EVENTS_CHANNEL``. Delivery is best effort: the database row is
the source of truth and clients resynchronize by polling.
"""

from __future__ import annotations

from typing import Protocol

ORDER_EVENTS_CHANNEL = "events:orders"


class EventPublisher(Protocol):
    def publish(self, channel: str, message: str) -> None: ...
