"""Shared plumbing for use cases that move an order through its lifecycle."""

from __future__ import annotations

import logging
from datetime import datetime

from qrdine.application.mappers.event_envelope import serialize_order_event
from qrdine.application.metrics.order_lifecycle import (
    record_order_status,
    record_time_to_served,
    record_transition,
)
from qrdine.application.ports.publisher import ORDER_EVENTS_CHANNEL, EventPublisher
from qrdine.application.ports.repositories import OptimisticConcurrencyError, OrderRepository
from qrdine.application.use_cases.context import TraceContext
from qrdine.domain.common.ids import OrderId
from qrdine.domain.order.entities import Order, OrderEvent, OrderStatus, OrderTransitionError

logger = logging.getLogger(__name__)


class OrderNotFoundError(Exception):
    pass


class InvalidOrderTransitionError(Exception):
    pass


class OrderConflictError(Exception):
    pass


def load_order(order_repository: OrderRepository, order_id: OrderId) -> Order:
    order = order_repository.get(order_id)
    if order is None:
        raise OrderNotFoundError(f"order {order_id} not found")
    return order


def apply_event(order: Order, event: OrderEvent, now: datetime) -> Order:
    try:
        return order.apply(event, now)
    except OrderTransitionError as exc:
        raise InvalidOrderTransitionError(str(exc)) from exc


def persist_transition(
    order_repository: OrderRepository,
    current: Order,
    updated: Order,
) -> Order:
    """Compare-and-set the new status against the version that was read.

    When another writer got there first and already reached the same status
    the stored order is returned unchanged.
    """
    try:
        return order_repository.update_status_with_version(
            order=updated,
            expected_version=current.version,
        )
    except OptimisticConcurrencyError:
        latest = load_order(order_repository, current.order_id)
        if latest.status == updated.status:
            return latest
        raise OrderConflictError(f"order {current.order_id} status update conflict")


def record_order_transition(previous: Order, persisted: Order, now: datetime) -> None:
    record_transition(from_status=previous.status, to_status=persisted.status)
    record_order_status(persisted)
    if persisted.status == OrderStatus.SERVED:
        record_time_to_served(persisted, now=now)


def publish_order_event(
    publisher: EventPublisher,
    *,
    event_type: str,
    order: Order,
    occurred_at: datetime,
    trace_ctx: TraceContext,
    previous_status: OrderStatus | None = None,
) -> None:
    message = serialize_order_event(
        event_type=event_type,
        occurred_at=occurred_at,
        order=order,
        trace_id=trace_ctx.trace_id,
        request_id=trace_ctx.request_id,
        previous_status=previous_status.value if previous_status else None,
    )
    try:
        publisher.publish(channel=ORDER_EVENTS_CHANNEL, message=message)
    except Exception:
        logger.warning(
            "order_event_publish_failed",
            extra={"order_id": str(order.order_id), "event_type": event_type},
            exc_info=True,
        )
