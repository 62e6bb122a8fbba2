from __future__ import annotations

import logging
from datetime import datetime, timezone

from qrdine.application.dto.responses import OrderResponse
from qrdine.application.mappers.order_mapper import to_order_response
from qrdine.application.ports.publisher import EventPublisher
from qrdine.application.ports.repositories import CartRepository, OrderRepository
from qrdine.application.use_cases.context import TraceContext
from qrdine.application.use_cases.order_transitions import (
    InvalidOrderTransitionError,
    apply_event,
    load_order,
    persist_transition,
    publish_order_event,
    record_order_transition,
)
from qrdine.domain.common.ids import OrderId
from qrdine.domain.order.entities import EVENT_FOR_TARGET_STATUS, Order, OrderStatus

logger = logging.getLogger(__name__)


class InvalidOrderStatusError(Exception):
    pass


def parse_target_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(value.strip().lower())
    except ValueError as exc:
        raise InvalidOrderStatusError(f"unknown order status {value!r}") from exc


class AdvanceOrderStatus:
    """Staff moves an order forward: queue -> cooking -> served -> done."""

    def __init__(
        self,
        order_repository: OrderRepository,
        cart_repository: CartRepository,
        publisher: EventPublisher,
    ) -> None:
        self._order_repository = order_repository
        self._cart_repository = cart_repository
        self._publisher = publisher

    def execute(self, order_id: OrderId, status: str, trace_ctx: TraceContext) -> OrderResponse:
        target = parse_target_status(status)
        order = load_order(self._order_repository, order_id)
        if order.status == target:
            return to_order_response(order)

        event = EVENT_FOR_TARGET_STATUS.get(target)
        if event is None:
            raise InvalidOrderTransitionError(
                f"status {target.value} cannot be set by staff, order is {order.status.value}"
            )

        now = datetime.now(timezone.utc)
        updated = apply_event(order, event, now)
        persisted = persist_transition(self._order_repository, order, updated)
        self._mirror_cart(persisted, now)

        record_order_transition(order, persisted, now)
        logger.info(
            "order_status_advanced",
            extra={
                "order_id": str(persisted.order_id),
                "from_status": order.status.value,
                "to_status": persisted.status.value,
            },
        )
        publish_order_event(
            self._publisher,
            event_type="order.status_changed",
            order=persisted,
            occurred_at=now,
            trace_ctx=trace_ctx,
            previous_status=order.status,
        )
        return to_order_response(persisted)

    def _mirror_cart(self, order: Order, now: datetime) -> None:
        cart = self._cart_repository.get(order.table_number)
        if cart is None or not cart.is_active:
            return
        self._cart_repository.save(cart.mirror_status(order.status, now))
