from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from qrdine.domain.common.errors import DomainValidationError
from qrdine.domain.common.ids import MenuItemId, OrderId, TableNumber
from qrdine.domain.common.money import DEFAULT_CURRENCY, Money

TAX_RATE_PERCENT = 11


class OrderStatus(str, Enum):
    PENDING = "pending"
    QUEUE = "queue"
    COOKING = "cooking"
    SERVED = "served"
    DONE = "done"
    CANCELLED = "cancelled"
    FAILED = "failed"


class OrderEvent(str, Enum):
    PAYMENT_SETTLED = "payment_settled"
    PAYMENT_PENDING = "payment_pending"
    PAYMENT_CANCELLED = "payment_cancelled"
    PAYMENT_FAILED = "payment_failed"
    START_COOKING = "start_cooking"
    SERVE = "serve"
    COMPLETE = "complete"


# (current status, event) -> next status. Pairs not listed are illegal.
TRANSITIONS: dict[tuple[OrderStatus, OrderEvent], OrderStatus] = {
    (OrderStatus.PENDING, OrderEvent.PAYMENT_SETTLED): OrderStatus.QUEUE,
    (OrderStatus.PENDING, OrderEvent.PAYMENT_PENDING): OrderStatus.PENDING,
    (OrderStatus.PENDING, OrderEvent.PAYMENT_CANCELLED): OrderStatus.CANCELLED,
    (OrderStatus.PENDING, OrderEvent.PAYMENT_FAILED): OrderStatus.FAILED,
    (OrderStatus.QUEUE, OrderEvent.START_COOKING): OrderStatus.COOKING,
    (OrderStatus.COOKING, OrderEvent.SERVE): OrderStatus.SERVED,
    (OrderStatus.SERVED, OrderEvent.COMPLETE): OrderStatus.DONE,
}

# Event that staff or customers trigger to move an order into the given status.
EVENT_FOR_TARGET_STATUS: dict[OrderStatus, OrderEvent] = {
    OrderStatus.COOKING: OrderEvent.START_COOKING,
    OrderStatus.SERVED: OrderEvent.SERVE,
    OrderStatus.DONE: OrderEvent.COMPLETE,
}

ACTIVE_STATUSES = frozenset({OrderStatus.QUEUE, OrderStatus.COOKING, OrderStatus.SERVED})


class OrderTransitionError(Exception):
    pass


class OrderNotDeletableError(Exception):
    pass


def next_status(current: OrderStatus, event: OrderEvent) -> OrderStatus:
    try:
        return TRANSITIONS[(current, event)]
    except KeyError as exc:
        raise OrderTransitionError(
            f"cannot apply {event.value} to order in status={current.value}"
        ) from exc


def compute_tax(subtotal: Money) -> Money:
    # Half-up rounding on whole currency units.
    amount = (subtotal.amount * TAX_RATE_PERCENT + 50) // 100
    return Money(amount=amount, currency=subtotal.currency)


@dataclass(frozen=True)
class OrderLine:
    item_id: MenuItemId
    name: str
    quantity: int
    unit_price: Money
    line_total: Money

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise DomainValidationError("quantity must be >= 1")
        if self.unit_price.currency != self.line_total.currency:
            raise DomainValidationError("line_total currency must match unit_price currency")
        if self.line_total.amount != self.unit_price.amount * self.quantity:
            raise DomainValidationError("line_total must equal unit_price * quantity")


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    table_number: TableNumber
    status: OrderStatus
    lines: list[OrderLine]
    subtotal: Money
    tax: Money
    total: Money
    created_at: datetime
    updated_at: datetime
    payment_method: str = "midtrans"
    customer_name: str | None = None
    customer_phone: str | None = None
    payment_token: str | None = None
    payment_redirect_url: str | None = None
    version: int = 1

    def __post_init__(self) -> None:
        if not self.lines:
            raise DomainValidationError("order must contain at least one line")
        currency = self.lines[0].line_total.currency
        if {self.subtotal.currency, self.tax.currency, self.total.currency} != {currency}:
            raise DomainValidationError("order amounts must share the line currency")
        expected_subtotal = sum(line.line_total.amount for line in self.lines)
        if self.subtotal.amount != expected_subtotal:
            raise DomainValidationError("order subtotal must equal sum of line totals")
        if self.total.amount != self.subtotal.amount + self.tax.amount:
            raise DomainValidationError("order total must equal subtotal + tax")

    def apply(self, event: OrderEvent, now: datetime) -> Order:
        return replace(self, status=next_status(self.status, event), updated_at=now)

    def ensure_deletable(self) -> None:
        if self.status != OrderStatus.PENDING:
            raise OrderNotDeletableError(
                f"only pending orders can be deleted, order {self.order_id} is {self.status.value}"
            )


def build_order_line(item_id: MenuItemId, name: str, unit_price: int, quantity: int) -> OrderLine:
    price = Money(amount=unit_price, currency=DEFAULT_CURRENCY)
    return OrderLine(
        item_id=item_id,
        name=name,
        quantity=quantity,
        unit_price=price,
        line_total=price.times(quantity),
    )


def create_pending_order(
    order_id: OrderId,
    table_number: TableNumber,
    lines: list[OrderLine],
    now: datetime,
    customer_name: str | None = None,
    customer_phone: str | None = None,
) -> Order:
    if not lines:
        raise DomainValidationError("order must contain at least one line")

    currency = lines[0].line_total.currency
    subtotal = Money(amount=sum(line.line_total.amount for line in lines), currency=currency)
    tax = compute_tax(subtotal)
    return Order(
        order_id=order_id,
        table_number=table_number,
        status=OrderStatus.PENDING,
        lines=lines,
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
        created_at=now,
        updated_at=now,
        customer_name=customer_name,
        customer_phone=customer_phone,
    )
