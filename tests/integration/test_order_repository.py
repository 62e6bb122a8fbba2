from __future__ import annotations

import sys
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from sqlalchemy import Engine

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from qrdine.application.ports.repositories import OptimisticConcurrencyError
from qrdine.domain.cart.entities import Cart, CartItem
from qrdine.domain.common.ids import MenuItemId, OrderId, TableNumber
from qrdine.domain.order.entities import (
    Order,
    OrderStatus,
    build_order_line,
    create_pending_order,
)
from qrdine.infrastructure.db.repositories.cart_repo import SqlAlchemyCartRepository
from qrdine.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository

NOW = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


def _order(order_id: str, table_number: str = "3", created_at: datetime = NOW) -> Order:
    return create_pending_order(
        order_id=OrderId(order_id),
        table_number=TableNumber(table_number),
        lines=[
            build_order_line(MenuItemId("itm_001"), "Nasi Goreng", unit_price=25000, quantity=2),
            build_order_line(MenuItemId("itm_004"), "Es Teh", unit_price=5000, quantity=1),
        ],
        now=created_at,
        customer_name="Budi",
    )


def test_add_and_get_round_trips_lines_and_money(engine: Engine) -> None:
    repository = SqlAlchemyOrderRepository(engine)
    repository.add(_order("ORDER-3-1"))

    loaded = repository.get(OrderId("ORDER-3-1"))

    assert loaded is not None
    assert [line.name for line in loaded.lines] == ["Nasi Goreng", "Es Teh"]
    assert loaded.subtotal.amount == 55000
    assert loaded.tax.amount == 6050
    assert loaded.total.amount == 61050
    assert loaded.customer_name == "Budi"
    assert loaded.created_at == NOW
    assert loaded.version == 1
    assert repository.get(OrderId("ORDER-missing")) is None


def test_status_update_bumps_version_once(engine: Engine) -> None:
    repository = SqlAlchemyOrderRepository(engine)
    order = _order("ORDER-3-2")
    repository.add(order)
    queued = replace(order, status=OrderStatus.QUEUE, updated_at=NOW + timedelta(minutes=1))

    updated = repository.update_status_with_version(queued, expected_version=1)

    assert updated.status == OrderStatus.QUEUE
    assert updated.version == 2
    with pytest.raises(OptimisticConcurrencyError):
        repository.update_status_with_version(queued, expected_version=1)
    current = repository.get(order.order_id)
    assert current is not None
    assert current.version == 2


def test_settle_payment_writes_order_and_cart_together(engine: Engine) -> None:
    orders = SqlAlchemyOrderRepository(engine)
    carts = SqlAlchemyCartRepository(engine)
    order = _order("ORDER-3-3")
    orders.add(order)
    carts.save(
        Cart(
            table_number=TableNumber("3"),
            items=[CartItem(MenuItemId("itm_001"), "Nasi Goreng", 25000, 2)],
            updated_at=NOW,
        )
    )
    settled_cart = Cart(
        table_number=TableNumber("3"),
        is_active=True,
        status=OrderStatus.QUEUE,
        updated_at=NOW,
    )
    queued = replace(order, status=OrderStatus.QUEUE)

    result = orders.settle_payment(queued, expected_version=1, cart=settled_cart)

    assert result.status == OrderStatus.QUEUE
    cart = carts.get(TableNumber("3"))
    assert cart is not None
    assert cart.is_empty
    assert cart.is_active
    assert cart.status == OrderStatus.QUEUE


def test_failed_settlement_leaves_cart_untouched(engine: Engine) -> None:
    orders = SqlAlchemyOrderRepository(engine)
    carts = SqlAlchemyCartRepository(engine)
    order = _order("ORDER-3-4")
    orders.add(order)
    carts.save(
        Cart(
            table_number=TableNumber("3"),
            items=[CartItem(MenuItemId("itm_001"), "Nasi Goreng", 25000, 1)],
        )
    )

    with pytest.raises(OptimisticConcurrencyError):
        orders.settle_payment(
            replace(order, status=OrderStatus.QUEUE),
            expected_version=7,
            cart=Cart(table_number=TableNumber("3"), is_active=True),
        )

    cart = carts.get(TableNumber("3"))
    assert cart is not None
    assert len(cart.items) == 1
    stored = orders.get(order.order_id)
    assert stored is not None
    assert stored.status == OrderStatus.PENDING


def test_listing_filters_and_orders_newest_first(engine: Engine) -> None:
    repository = SqlAlchemyOrderRepository(engine)
    older = _order("ORDER-1-1", table_number="1")
    newer = _order("ORDER-1-2", table_number="1", created_at=NOW + timedelta(minutes=5))
    other_table = _order("ORDER-2-1", table_number="2", created_at=NOW + timedelta(minutes=1))
    for order in (older, newer, other_table):
        repository.add(order)
    repository.update_status_with_version(replace(older, status=OrderStatus.QUEUE), 1)

    everything = repository.list_by_statuses(None)
    queued = repository.list_by_statuses(frozenset({OrderStatus.QUEUE}))
    table_one = repository.list_for_table(TableNumber("1"))

    assert [str(order.order_id) for order in everything] == [
        "ORDER-1-2",
        "ORDER-2-1",
        "ORDER-1-1",
    ]
    assert [str(order.order_id) for order in queued] == ["ORDER-1-1"]
    assert [str(order.order_id) for order in table_one] == ["ORDER-1-2", "ORDER-1-1"]


def test_delete_removes_order_and_lines(engine: Engine) -> None:
    repository = SqlAlchemyOrderRepository(engine)
    repository.add(_order("ORDER-3-5"))

    assert repository.delete(OrderId("ORDER-3-5")) is True
    assert repository.get(OrderId("ORDER-3-5")) is None
    assert repository.delete(OrderId("ORDER-3-5")) is False
