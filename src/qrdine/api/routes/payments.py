from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from qrdine.api.middleware.request_id import get_request_id
from qrdine.application.dto.requests import CheckoutRequest, PaymentNotificationRequest
from qrdine.application.dto.responses import CheckoutResponse
from qrdine.application.use_cases.checkout import Checkout
from qrdine.application.use_cases.context import TraceContext
from qrdine.application.use_cases.reconcile_payment import (
    InvalidNotificationError,
    ReconcilePayment,
)
from qrdine.infrastructure.db.repositories.cart_repo import SqlAlchemyCartRepository
from qrdine.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from qrdine.infrastructure.messaging.redis_publisher import RedisEventPublisher
from qrdine.infrastructure.observability.otel import current_trace_id
from qrdine.infrastructure.payments.midtrans import MidtransSnapGateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


def _checkout_use_case() -> Checkout:
    return Checkout(
        cart_repository=SqlAlchemyCartRepository(),
        order_repository=SqlAlchemyOrderRepository(),
        payment_gateway=MidtransSnapGateway(),
        publisher=RedisEventPublisher(),
    )


def _reconcile_payment_use_case() -> ReconcilePayment:
    return ReconcilePayment(
        order_repository=SqlAlchemyOrderRepository(),
        cart_repository=SqlAlchemyCartRepository(),
        publisher=RedisEventPublisher(),
    )


def _trace_context() -> TraceContext:
    return TraceContext(trace_id=current_trace_id(), request_id=get_request_id())


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


@router.post(
    "/v1/payments",
    response_model=CheckoutResponse,
    status_code=status.HTTP_201_CREATED,
)
def checkout(request_dto: CheckoutRequest) -> CheckoutResponse:
    return _checkout_use_case().execute(request_dto=request_dto, trace_ctx=_trace_context())


@router.post("/v1/payments/notifications")
def payment_notification(
    payload: dict[str, Any] | None = Body(default=None),
) -> JSONResponse:
    """Gateway callback. Answers with its own ``{"success": ...}`` body."""
    if not payload:
        return _failure(status.HTTP_400_BAD_REQUEST, "notification body is required")
    try:
        notification = PaymentNotificationRequest.model_validate(payload)
    except ValidationError as exc:
        return _failure(status.HTTP_400_BAD_REQUEST, f"invalid notification body: {exc}")

    try:
        result = _reconcile_payment_use_case().execute(
            notification=notification,
            trace_ctx=_trace_context(),
        )
    except InvalidNotificationError as exc:
        return _failure(status.HTTP_400_BAD_REQUEST, str(exc))
    except Exception:
        logger.exception(
            "payment_notification_failed",
            extra={"order_id": notification.order_id},
        )
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "notification processing failed")

    return JSONResponse(status_code=status.HTTP_200_OK, content=result.model_dump())
