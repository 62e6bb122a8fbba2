from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from qrdine.api.middleware.request_id import get_request_id
from qrdine.api.security import Principal, require_staff
from qrdine.application.dto.requests import AdvanceOrderStatusRequest, CompleteOrderRequest
from qrdine.application.dto.responses import (
    CompleteOrderResponse,
    MessageResponse,
    OrderResponse,
    OrdersResponse,
)
from qrdine.application.use_cases.advance_order import AdvanceOrderStatus
from qrdine.application.use_cases.complete_order import CompleteOrder
from qrdine.application.use_cases.context import TraceContext
from qrdine.application.use_cases.delete_order import DeleteOrder
from qrdine.application.use_cases.list_orders import GetOrder, ListOrders
from qrdine.domain.common.ids import OrderId
from qrdine.infrastructure.db.repositories.cart_repo import SqlAlchemyCartRepository
from qrdine.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from qrdine.infrastructure.db.repositories.review_repo import SqlAlchemyReviewRepository
from qrdine.infrastructure.messaging.redis_publisher import RedisEventPublisher
from qrdine.infrastructure.observability.otel import current_trace_id

router = APIRouter(tags=["orders"])


def _trace_context() -> TraceContext:
    return TraceContext(trace_id=current_trace_id(), request_id=get_request_id())


def _list_orders_use_case() -> ListOrders:
    return ListOrders(order_repository=SqlAlchemyOrderRepository())


def _get_order_use_case() -> GetOrder:
    return GetOrder(order_repository=SqlAlchemyOrderRepository())


def _advance_order_use_case() -> AdvanceOrderStatus:
    return AdvanceOrderStatus(
        order_repository=SqlAlchemyOrderRepository(),
        cart_repository=SqlAlchemyCartRepository(),
        publisher=RedisEventPublisher(),
    )


def _complete_order_use_case() -> CompleteOrder:
    return CompleteOrder(
        order_repository=SqlAlchemyOrderRepository(),
        review_repository=SqlAlchemyReviewRepository(),
        cart_repository=SqlAlchemyCartRepository(),
        publisher=RedisEventPublisher(),
    )


def _delete_order_use_case() -> DeleteOrder:
    return DeleteOrder(order_repository=SqlAlchemyOrderRepository())


@router.get("/v1/orders", response_model=OrdersResponse)
def list_orders(
    status: str | None = Query(default=None),
    _: Principal = Depends(require_staff),
) -> OrdersResponse:
    return _list_orders_use_case().execute(status=status)


@router.get("/v1/orders/{order_id}", response_model=OrderResponse)
def get_order(order_id: str) -> OrderResponse:
    return _get_order_use_case().execute(order_id=OrderId(order_id))


@router.patch("/v1/orders/{order_id}/status", response_model=OrderResponse)
def advance_order_status(
    order_id: str,
    request_dto: AdvanceOrderStatusRequest,
    _: Principal = Depends(require_staff),
) -> OrderResponse:
    return _advance_order_use_case().execute(
        order_id=OrderId(order_id),
        status=request_dto.status,
        trace_ctx=_trace_context(),
    )


@router.post("/v1/orders/{order_id}/complete", response_model=CompleteOrderResponse)
def complete_order(
    order_id: str,
    request_dto: CompleteOrderRequest | None = None,
) -> CompleteOrderResponse:
    return _complete_order_use_case().execute(
        order_id=OrderId(order_id),
        request_dto=request_dto or CompleteOrderRequest(),
        trace_ctx=_trace_context(),
    )


@router.delete("/v1/orders/{order_id}", response_model=MessageResponse)
def delete_order(order_id: str) -> MessageResponse:
    return _delete_order_use_case().execute(order_id=OrderId(order_id))
