from __future__ import annotations

from qrdine.application.dto.responses import (
    MoneyResponse,
    OrderLineResponse,
    OrderResponse,
    OrdersResponse,
)
from qrdine.domain.common.money import Money
from qrdine.domain.order.entities import Order


def to_money_response(money: Money) -> MoneyResponse:
    return MoneyResponse(amount=money.amount, currency=money.currency)


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        orderId=str(order.order_id),
        tableNumber=str(order.table_number),
        status=order.status.value,
        lines=[
            OrderLineResponse(
                itemId=str(line.item_id),
                name=line.name,
                quantity=line.quantity,
                unitPrice=to_money_response(line.unit_price),
                lineTotal=to_money_response(line.line_total),
            )
            for line in order.lines
        ],
        subtotal=to_money_response(order.subtotal),
        tax=to_money_response(order.tax),
        total=to_money_response(order.total),
        paymentMethod=order.payment_method,
        customerName=order.customer_name,
        customerPhone=order.customer_phone,
        paymentToken=order.payment_token,
        paymentRedirectUrl=order.payment_redirect_url,
        createdAt=order.created_at,
        updatedAt=order.updated_at,
    )


def to_orders_response(orders: list[Order]) -> OrdersResponse:
    return OrdersResponse(orders=[to_order_response(order) for order in orders])
