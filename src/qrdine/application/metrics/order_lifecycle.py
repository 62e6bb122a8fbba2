from __future__ import annotations

from datetime import datetime, timezone

from prometheus_client import Counter, Histogram

from qrdine.domain.order.entities import Order, OrderStatus

ORDERS_TOTAL = Counter(
    "qrdine_orders_total",
    "Total number of orders observed by status.",
    ["status"],
)

ORDER_TRANSITION_TOTAL = Counter(
    "qrdine_order_transition_total",
    "Total number of order lifecycle transitions.",
    ["from", "to"],
)

PAYMENT_NOTIFICATIONS_TOTAL = Counter(
    "qrdine_payment_notifications_total",
    "Total number of payment gateway notifications by transaction status and outcome.",
    ["transaction_status", "outcome"],
)

ORDER_TIME_TO_SERVED_SECONDS = Histogram(
    "qrdine_order_time_to_served_seconds",
    "Time between order creation and serving.",
)

NUTRITION_FALLBACK_TOTAL = Counter(
    "qrdine_nutrition_fallback_total",
    "Total number of nutrition estimates served by the keyword fallback.",
)


def record_order_status(order: Order) -> None:
    ORDERS_TOTAL.labels(status=order.status.value).inc()


def record_transition(from_status: OrderStatus, to_status: OrderStatus) -> None:
    ORDER_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_payment_notification(transaction_status: str, outcome: str) -> None:
    PAYMENT_NOTIFICATIONS_TOTAL.labels(
        transaction_status=transaction_status,
        outcome=outcome,
    ).inc()


def record_time_to_served(order: Order, now: datetime | None = None) -> None:
    current = now or datetime.now(timezone.utc)
    ORDER_TIME_TO_SERVED_SECONDS.observe(max((current - order.created_at).total_seconds(), 0.0))


def record_nutrition_fallback() -> None:
    NUTRITION_FALLBACK_TOTAL.inc()
