from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from qrdine.api.middleware.request_id import get_request_id
from qrdine.api.security import AuthenticationRequiredError, PermissionDeniedError
from qrdine.application.use_cases.advance_order import InvalidOrderStatusError
from qrdine.application.use_cases.checkout import (
    EmptyCartError,
    PaymentNotConfiguredError,
    PaymentUnavailableError,
)
from qrdine.application.use_cases.delete_order import OrderDeletionNotAllowedError
from qrdine.application.use_cases.estimate_nutrition import EmptyCompositionError
from qrdine.application.use_cases.list_orders import InvalidOrderFilterError
from qrdine.application.use_cases.manage_menu import MenuItemNotFoundError
from qrdine.application.use_cases.manage_tables import (
    DuplicateTableNumberError,
    TableNotFoundError,
)
from qrdine.application.use_cases.manage_users import (
    DuplicateUserError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from qrdine.application.use_cases.order_transitions import (
    InvalidOrderTransitionError,
    OrderConflictError,
    OrderNotFoundError,
)
from qrdine.application.use_cases.reconcile_payment import InvalidNotificationError
from qrdine.application.use_cases.restaurant_profile import (
    DuplicateRestaurantError,
    RestaurantNotFoundError,
)
from qrdine.application.use_cases.reviews import ReviewNotFoundError
from qrdine.application.use_cases.table_qr import InvalidQrActionError
from qrdine.application.use_cases.upload_image import ImageUploadFailedError, InvalidUploadError
from qrdine.application.use_cases.validation import InvalidInputError

logger = logging.getLogger(__name__)


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 405:
        code = "METHOD_NOT_ALLOWED"
    elif http_exc.status_code == 409:
        code = "CONFLICT"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": validation_exc.errors()},
    )


async def _unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", exc_info=exc)
    return _error_response(
        status_code=500,
        code="INTERNAL_ERROR",
        message=str(exc) or "internal server error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (AuthenticationRequiredError, 401, "UNAUTHENTICATED"),
        (InvalidCredentialsError, 401, "INVALID_CREDENTIALS"),
        (PermissionDeniedError, 403, "FORBIDDEN"),
        (OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
        (TableNotFoundError, 404, "TABLE_NOT_FOUND"),
        (MenuItemNotFoundError, 404, "MENU_ITEM_NOT_FOUND"),
        (ReviewNotFoundError, 404, "REVIEW_NOT_FOUND"),
        (UserNotFoundError, 404, "USER_NOT_FOUND"),
        (RestaurantNotFoundError, 404, "RESTAURANT_NOT_FOUND"),
        (EmptyCartError, 400, "EMPTY_CART"),
        (InvalidOrderStatusError, 400, "INVALID_ORDER_STATUS"),
        (InvalidOrderFilterError, 400, "INVALID_ORDER_FILTER"),
        (InvalidNotificationError, 400, "INVALID_NOTIFICATION"),
        (InvalidQrActionError, 400, "INVALID_QR_ACTION"),
        (InvalidUploadError, 400, "INVALID_UPLOAD"),
        (EmptyCompositionError, 400, "INVALID_COMPOSITION"),
        (DuplicateTableNumberError, 400, "DUPLICATE_TABLE_NUMBER"),
        (DuplicateUserError, 400, "DUPLICATE_USER"),
        (DuplicateRestaurantError, 400, "DUPLICATE_RESTAURANT"),
        (InvalidOrderTransitionError, 409, "INVALID_ORDER_TRANSITION"),
        (OrderConflictError, 409, "CONFLICT"),
        (OrderDeletionNotAllowedError, 409, "ORDER_NOT_DELETABLE"),
        (PaymentNotConfiguredError, 500, "PAYMENT_NOT_CONFIGURED"),
        (PaymentUnavailableError, 502, "PAYMENT_GATEWAY_ERROR"),
        (ImageUploadFailedError, 502, "IMAGE_HOST_ERROR"),
        (InvalidInputError, 400, "INVALID_REQUEST"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
