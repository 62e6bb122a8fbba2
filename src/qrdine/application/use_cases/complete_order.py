from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from qrdine.application.dto.requests import CompleteOrderRequest
from qrdine.application.dto.responses import CompleteOrderResponse
from qrdine.application.mappers.order_mapper import to_order_response
from qrdine.application.mappers.review_mapper import to_review_response
from qrdine.application.ports.publisher import EventPublisher
from qrdine.application.ports.repositories import (
    CartRepository,
    OrderRepository,
    ReviewRepository,
)
from qrdine.application.use_cases.context import TraceContext
from qrdine.application.use_cases.order_transitions import (
    apply_event,
    load_order,
    persist_transition,
    publish_order_event,
    record_order_transition,
)
from qrdine.domain.common.ids import OrderId, ReviewId
from qrdine.domain.order.entities import OrderEvent, OrderStatus
from qrdine.domain.review.entities import Review

logger = logging.getLogger(__name__)


class CompleteOrder:
    def __init__(
        self,
        order_repository: OrderRepository,
        review_repository: ReviewRepository,
        cart_repository: CartRepository,
        publisher: EventPublisher,
    ) -> None:
        self._order_repository = order_repository
        self._review_repository = review_repository
        self._cart_repository = cart_repository
        self._publisher = publisher

    def execute(
        self,
        order_id: OrderId,
        request_dto: CompleteOrderRequest,
        trace_ctx: TraceContext,
    ) -> CompleteOrderResponse:
        order = load_order(self._order_repository, order_id)
        if order.status == OrderStatus.DONE:
            return CompleteOrderResponse(order=to_order_response(order))

        now = datetime.now(timezone.utc)
        updated = apply_event(order, OrderEvent.COMPLETE, now)
        persisted = persist_transition(self._order_repository, order, updated)

        cart = self._cart_repository.get(persisted.table_number)
        if cart is not None and cart.is_active:
            self._cart_repository.save(cart.mirror_status(persisted.status, now))

        review = None
        if request_dto.review is not None:
            review = Review(
                review_id=ReviewId(f"rev_{uuid4().hex[:12]}"),
                order_id=persisted.order_id,
                table_number=persisted.table_number,
                rating=request_dto.review.rating,
                comment=request_dto.review.comment or "",
                created_at=now,
            )
            self._review_repository.add(review)

        record_order_transition(order, persisted, now)
        logger.info(
            "order_completed",
            extra={"order_id": str(persisted.order_id), "reviewed": review is not None},
        )
        publish_order_event(
            self._publisher,
            event_type="order.status_changed",
            order=persisted,
            occurred_at=now,
            trace_ctx=trace_ctx,
            previous_status=order.status,
        )
        return CompleteOrderResponse(
            order=to_order_response(persisted),
            review=to_review_response(review) if review is not None else None,
        )
