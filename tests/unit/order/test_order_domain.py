from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrdine.domain.common.ids import MenuItemId, OrderId, TableNumber
from qrdine.domain.common.money import Money
from qrdine.domain.order.entities import (
    TRANSITIONS,
    Order,
    OrderEvent,
    OrderLine,
    OrderNotDeletableError,
    OrderStatus,
    OrderTransitionError,
    build_order_line,
    compute_tax,
    create_pending_order,
)
from qrdine.domain.order.gateway_status import (
    UnknownGatewayStatusError,
    event_for_gateway_status,
    is_successful_payment,
)

NOW = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


def _pending_order() -> Order:
    return create_pending_order(
        order_id=OrderId("ORDER-1-1"),
        table_number=TableNumber("1"),
        lines=[
            build_order_line(MenuItemId("m1"), "Nasi Goreng", unit_price=25000, quantity=2),
        ],
        now=NOW,
    )


def test_pending_order_totals_include_tax() -> None:
    order = _pending_order()

    assert order.status == OrderStatus.PENDING
    assert order.subtotal == Money(amount=50000)
    assert order.tax == Money(amount=5500)
    assert order.total == Money(amount=55500)
    assert order.version == 1


def test_tax_rounds_half_up() -> None:
    assert compute_tax(Money(amount=50)).amount == 6
    assert compute_tax(Money(amount=40)).amount == 4


def test_happy_path_walks_the_lifecycle() -> None:
    order = _pending_order()
    for event, expected in [
        (OrderEvent.PAYMENT_SETTLED, OrderStatus.QUEUE),
        (OrderEvent.START_COOKING, OrderStatus.COOKING),
        (OrderEvent.SERVE, OrderStatus.SERVED),
        (OrderEvent.COMPLETE, OrderStatus.DONE),
    ]:
        order = order.apply(event, NOW)
        assert order.status == expected


def test_pending_order_cannot_jump_to_done() -> None:
    with pytest.raises(OrderTransitionError):
        _pending_order().apply(OrderEvent.COMPLETE, NOW)


def test_terminal_statuses_have_no_outgoing_transitions() -> None:
    terminal = {OrderStatus.DONE, OrderStatus.CANCELLED, OrderStatus.FAILED}
    assert not [pair for pair in TRANSITIONS if pair[0] in terminal]


def test_payment_events_only_apply_to_pending_orders() -> None:
    queued = _pending_order().apply(OrderEvent.PAYMENT_SETTLED, NOW)
    with pytest.raises(OrderTransitionError):
        queued.apply(OrderEvent.PAYMENT_CANCELLED, NOW)


def test_only_pending_orders_are_deletable() -> None:
    _pending_order().ensure_deletable()

    with pytest.raises(OrderNotDeletableError):
        _pending_order().apply(OrderEvent.PAYMENT_SETTLED, NOW).ensure_deletable()


def test_order_line_rejects_inconsistent_total() -> None:
    with pytest.raises(ValueError):
        OrderLine(
            item_id=MenuItemId("m1"),
            name="Nasi",
            quantity=2,
            unit_price=Money(amount=100),
            line_total=Money(amount=150),
        )


def test_order_requires_lines() -> None:
    with pytest.raises(ValueError):
        create_pending_order(
            order_id=OrderId("ORDER-1-1"),
            table_number=TableNumber("1"),
            lines=[],
            now=NOW,
        )


@pytest.mark.parametrize(
    ("transaction_status", "expected"),
    [
        ("settlement", OrderEvent.PAYMENT_SETTLED),
        ("capture", OrderEvent.PAYMENT_SETTLED),
        ("pending", OrderEvent.PAYMENT_PENDING),
        ("deny", OrderEvent.PAYMENT_CANCELLED),
        ("cancel", OrderEvent.PAYMENT_CANCELLED),
        ("expire", OrderEvent.PAYMENT_CANCELLED),
        ("failure", OrderEvent.PAYMENT_FAILED),
        (" Settlement ", OrderEvent.PAYMENT_SETTLED),
    ],
)
def test_gateway_status_mapping(transaction_status: str, expected: OrderEvent) -> None:
    assert event_for_gateway_status(transaction_status) == expected


def test_unknown_gateway_status_is_rejected() -> None:
    with pytest.raises(UnknownGatewayStatusError):
        event_for_gateway_status("refund")


def test_only_settlement_counts_as_successful_payment() -> None:
    assert is_successful_payment(OrderEvent.PAYMENT_SETTLED)
    assert not is_successful_payment(OrderEvent.PAYMENT_PENDING)
