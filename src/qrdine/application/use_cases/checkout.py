from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable
from uuid import uuid4

from qrdine.application.dto.requests import CheckoutRequest
from qrdine.application.dto.responses import CheckoutResponse
from qrdine.application.metrics.order_lifecycle import record_order_status
from qrdine.application.ports.publisher import EventPublisher
from qrdine.application.ports.repositories import CartRepository, OrderRepository
from qrdine.application.ports.services import (
    PaymentGateway,
    PaymentGatewayConfigError,
    PaymentGatewayError,
)
from qrdine.application.use_cases.context import TraceContext
from qrdine.application.use_cases.order_transitions import publish_order_event
from qrdine.domain.common.ids import OrderId, TableNumber
from qrdine.domain.order.entities import build_order_line, create_pending_order

logger = logging.getLogger(__name__)


class EmptyCartError(Exception):
    pass


class PaymentUnavailableError(Exception):
    pass


class PaymentNotConfiguredError(Exception):
    pass


def gateway_order_id(table_number: TableNumber, now: datetime) -> OrderId:
    # Millisecond stamps alone collide for two checkouts at the same table.
    return OrderId(f"ORDER-{table_number}-{int(now.timestamp() * 1000)}-{uuid4().hex[:6]}")


class Checkout:
    def __init__(
        self,
        cart_repository: CartRepository,
        order_repository: OrderRepository,
        payment_gateway: PaymentGateway,
        publisher: EventPublisher,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._cart_repository = cart_repository
        self._order_repository = order_repository
        self._payment_gateway = payment_gateway
        self._publisher = publisher
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(self, request_dto: CheckoutRequest, trace_ctx: TraceContext) -> CheckoutResponse:
        table_number = TableNumber(request_dto.table_number)
        cart = self._cart_repository.get(table_number)
        if cart is None or cart.is_empty:
            raise EmptyCartError(f"cart for table {table_number} is empty")

        now = self._clock()
        lines = [
            build_order_line(
                item_id=item.item_id,
                name=item.name,
                unit_price=item.price,
                quantity=item.quantity,
            )
            for item in cart.items
        ]
        order = create_pending_order(
            order_id=gateway_order_id(table_number, now),
            table_number=table_number,
            lines=lines,
            now=now,
            customer_name=request_dto.customer_name,
            customer_phone=request_dto.customer_phone,
        )

        try:
            session = self._payment_gateway.create_transaction(order)
        except PaymentGatewayConfigError as exc:
            logger.error("payment_gateway_misconfigured", extra={"error": str(exc)})
            raise PaymentNotConfiguredError(str(exc)) from exc
        except PaymentGatewayError as exc:
            logger.warning(
                "payment_session_failed",
                extra={"order_id": str(order.order_id), "error": str(exc)},
            )
            raise PaymentUnavailableError(str(exc)) from exc

        order = replace(
            order,
            payment_token=session.token,
            payment_redirect_url=session.redirect_url,
        )
        self._order_repository.add(order)
        record_order_status(order)
        logger.info(
            "order_created",
            extra={
                "order_id": str(order.order_id),
                "table_number": str(table_number),
                "total": order.total.amount,
            },
        )
        publish_order_event(
            self._publisher,
            event_type="order.created",
            order=order,
            occurred_at=now,
            trace_ctx=trace_ctx,
        )

        return CheckoutResponse(
            orderId=str(order.order_id),
            token=session.token,
            redirectUrl=session.redirect_url,
            amount=order.total.amount,
        )
