"""Applies payment gateway notifications to orders.

Settlement moves the order into the kitchen queue and activates the
table's cart in the same database transaction.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from qrdine.application.dto.requests import PaymentNotificationRequest
from qrdine.application.dto.responses import PaymentNotificationResponse
from qrdine.application.metrics.order_lifecycle import record_payment_notification
from qrdine.application.ports.publisher import EventPublisher
from qrdine.application.ports.repositories import (
    CartRepository,
    OptimisticConcurrencyError,
    OrderRepository,
)
from qrdine.application.use_cases.context import TraceContext
from qrdine.application.use_cases.order_transitions import (
    OrderConflictError,
    apply_event,
    load_order,
    persist_transition,
    publish_order_event,
    record_order_transition,
)
from qrdine.domain.cart.entities import empty_cart
from qrdine.domain.common.ids import OrderId
from qrdine.domain.order.entities import (
    TRANSITIONS,
    Order,
    OrderEvent,
    OrderStatus,
)
from qrdine.domain.order.gateway_status import (
    UnknownGatewayStatusError,
    event_for_gateway_status,
    is_successful_payment,
)

logger = logging.getLogger(__name__)

# Statuses an order can only have reached after its payment settled.
_SETTLED_STATUSES = frozenset(
    {OrderStatus.QUEUE, OrderStatus.COOKING, OrderStatus.SERVED, OrderStatus.DONE}
)


class InvalidNotificationError(Exception):
    pass


def _already_applied(order: Order, event: OrderEvent) -> bool:
    if order.status == TRANSITIONS.get((OrderStatus.PENDING, event)):
        return True
    return is_successful_payment(event) and order.status in _SETTLED_STATUSES


class ReconcilePayment:
    def __init__(
        self,
        order_repository: OrderRepository,
        cart_repository: CartRepository,
        publisher: EventPublisher,
    ) -> None:
        self._order_repository = order_repository
        self._cart_repository = cart_repository
        self._publisher = publisher

    def execute(
        self,
        notification: PaymentNotificationRequest,
        trace_ctx: TraceContext,
    ) -> PaymentNotificationResponse:
        if not notification.order_id:
            raise InvalidNotificationError("notification is missing order_id")
        if not notification.transaction_status:
            raise InvalidNotificationError("notification is missing transaction_status")

        transaction_status = notification.transaction_status.strip().lower()
        try:
            event = event_for_gateway_status(transaction_status)
        except UnknownGatewayStatusError as exc:
            record_payment_notification(transaction_status, outcome="rejected")
            raise InvalidNotificationError(str(exc)) from exc

        order_id = OrderId(notification.order_id)
        order = self._order_repository.get(order_id)
        if order is None:
            record_payment_notification(transaction_status, outcome="order_not_found")
            logger.warning(
                "payment_notification_unknown_order",
                extra={"order_id": str(order_id), "transaction_status": transaction_status},
            )
            return PaymentNotificationResponse(
                success=False,
                message=f"order {order_id} not found",
                orderId=str(order_id),
            )

        # Payment notices only ever move an order out of pending.
        if order.status != OrderStatus.PENDING or _already_applied(order, event):
            return self._acknowledge(order, event, transaction_status)

        now = datetime.now(timezone.utc)
        updated = apply_event(order, event, now)
        try:
            if is_successful_payment(event):
                persisted = self._settle(order, updated, now)
            else:
                persisted = persist_transition(self._order_repository, order, updated)
        except OrderConflictError:
            latest = load_order(self._order_repository, order.order_id)
            if latest.status == OrderStatus.PENDING:
                raise
            return self._acknowledge(latest, event, transaction_status)

        record_payment_notification(transaction_status, outcome="applied")
        record_order_transition(order, persisted, now)
        logger.info(
            "payment_notification_applied",
            extra={
                "order_id": str(persisted.order_id),
                "transaction_status": transaction_status,
                "from_status": order.status.value,
                "to_status": persisted.status.value,
                "transaction_id": notification.transaction_id,
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
        return PaymentNotificationResponse(
            success=True,
            message="notification processed",
            orderId=str(persisted.order_id),
            status=persisted.status.value,
        )

    def _acknowledge(
        self,
        order: Order,
        event: OrderEvent,
        transaction_status: str,
    ) -> PaymentNotificationResponse:
        if _already_applied(order, event):
            outcome, message = "duplicate", "notification already applied"
        else:
            outcome = "stale"
            message = f"notification ignored, order is already {order.status.value}"
            logger.info(
                "payment_notification_stale",
                extra={
                    "order_id": str(order.order_id),
                    "transaction_status": transaction_status,
                    "order_status": order.status.value,
                },
            )
        record_payment_notification(transaction_status, outcome=outcome)
        return PaymentNotificationResponse(
            success=True,
            message=message,
            orderId=str(order.order_id),
            status=order.status.value,
        )

    def _settle(self, order: Order, updated: Order, now: datetime) -> Order:
        cart = self._cart_repository.get(order.table_number) or empty_cart(order.table_number)
        activated = cart.clear(now).activate(now)
        try:
            return self._order_repository.settle_payment(
                order=updated,
                expected_version=order.version,
                cart=activated,
            )
        except OptimisticConcurrencyError as exc:
            raise OrderConflictError(f"order {order.order_id} settlement conflict") from exc
