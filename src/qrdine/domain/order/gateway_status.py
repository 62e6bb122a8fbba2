"""Payment gateway vocabulary.

The gateway reports raw transaction states (``settlement``, ``capture``,
``deny`` ...). They never reach an order directly: each one is first
translated into an :class:`OrderEvent` and then run through the lifecycle
transition table.
"""

from __future__ import annotations

from qrdine.domain.order.entities import OrderEvent

GATEWAY_STATUS_EVENTS: dict[str, OrderEvent] = {
    "settlement": OrderEvent.PAYMENT_SETTLED,
    "capture": OrderEvent.PAYMENT_SETTLED,
    "pending": OrderEvent.PAYMENT_PENDING,
    "deny": OrderEvent.PAYMENT_CANCELLED,
    "cancel": OrderEvent.PAYMENT_CANCELLED,
    "expire": OrderEvent.PAYMENT_CANCELLED,
    "failure": OrderEvent.PAYMENT_FAILED,
}


class UnknownGatewayStatusError(Exception):
    pass


def event_for_gateway_status(transaction_status: str) -> OrderEvent:
    normalized = transaction_status.strip().lower()
    try:
        return GATEWAY_STATUS_EVENTS[normalized]
    except KeyError as exc:
        raise UnknownGatewayStatusError(
            f"unknown transaction_status: {transaction_status}"
        ) from exc


def is_successful_payment(event: OrderEvent) -> bool:
    return event == OrderEvent.PAYMENT_SETTLED
