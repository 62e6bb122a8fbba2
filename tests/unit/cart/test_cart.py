from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrdine.application.dto.requests import AddCartItemRequest, CartItemPayload
from qrdine.application.use_cases.cart_items import (
    ActivateCart,
    AddCartItem,
    ClearCart,
    GetCart,
    ListActiveCarts,
    RemoveCartItem,
    UpdateCartItem,
)
from qrdine.domain.cart.entities import Cart, CartItem, empty_cart
from qrdine.domain.common.ids import MenuItemId, TableNumber
from qrdine.domain.order.entities import OrderStatus

NOW = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)
T1 = TableNumber("1")


class FakeCartRepository:
    def __init__(self) -> None:
        self.carts: dict[str, Cart] = {}

    def get(self, table_number: TableNumber) -> Cart | None:
        return self.carts.get(str(table_number))

    def save(self, cart: Cart) -> None:
        self.carts[str(cart.table_number)] = cart

    def list_with_items(self) -> list[Cart]:
        return [cart for cart in self.carts.values() if cart.items]


def _add_request(item_id: str = "m1", price: int = 25000) -> AddCartItemRequest:
    return AddCartItemRequest(item=CartItemPayload(id=item_id, name="Nasi Goreng", price=price))


def test_add_appends_then_increments() -> None:
    cart = empty_cart(T1).add_item(MenuItemId("m1"), "Nasi Goreng", 25000, NOW)
    assert [(item.item_id, item.quantity) for item in cart.items] == [("m1", 1)]

    cart = cart.add_item(MenuItemId("m1"), "Nasi Goreng", 25000, NOW)
    assert [(item.item_id, item.quantity) for item in cart.items] == [("m1", 2)]
    assert cart.subtotal == 50000


def test_update_sets_quantity_or_removes() -> None:
    cart = empty_cart(T1).add_item(MenuItemId("m1"), "Nasi Goreng", 25000, NOW)

    assert cart.update_item(MenuItemId("m1"), 4, NOW).items[0].quantity == 4
    assert cart.update_item(MenuItemId("m1"), 0, NOW).is_empty
    assert cart.update_item(MenuItemId("m1"), -3, NOW).is_empty


def test_activate_marks_cart_queued() -> None:
    cart = empty_cart(T1).activate(NOW)

    assert cart.is_active is True
    assert cart.status == OrderStatus.QUEUE
    assert cart.created_at == NOW


def test_cart_item_rejects_zero_quantity() -> None:
    with pytest.raises(ValueError):
        CartItem(item_id=MenuItemId("m1"), name="Nasi", price=100, quantity=0)


def test_table_one_scenario_through_use_cases() -> None:
    repository = FakeCartRepository()

    first = AddCartItem(repository).execute(T1, _add_request())
    assert [(item.id, item.quantity) for item in first.items] == [("m1", 1)]

    second = AddCartItem(repository).execute(T1, _add_request())
    assert [(item.id, item.quantity) for item in second.items] == [("m1", 2)]
    assert second.subtotal == 50000

    emptied = UpdateCartItem(repository).execute(T1, MenuItemId("m1"), 0)
    assert emptied.items == []


def test_get_returns_empty_cart_for_unknown_table() -> None:
    result = GetCart(FakeCartRepository()).execute(TableNumber("42"))

    assert result.tableNumber == "42"
    assert result.items == []
    assert result.isActive is False
    assert result.status is None


def test_remove_clear_and_activate() -> None:
    repository = FakeCartRepository()
    AddCartItem(repository).execute(T1, _add_request("m1"))
    AddCartItem(repository).execute(T1, _add_request("m2", price=8000))

    removed = RemoveCartItem(repository).execute(T1, MenuItemId("m1"))
    assert [item.id for item in removed.items] == ["m2"]

    activated = ActivateCart(repository).execute(T1)
    assert activated.isActive is True
    assert activated.status == "queue"

    cleared = ClearCart(repository).execute(T1)
    assert cleared.items == []
    assert cleared.isActive is True


def test_list_active_carts_newest_first() -> None:
    repository = FakeCartRepository()
    repository.save(empty_cart(TableNumber("1")).add_item(MenuItemId("m1"), "A", 1, NOW))
    repository.save(
        empty_cart(TableNumber("2")).add_item(MenuItemId("m1"), "A", 1, NOW + timedelta(minutes=1))
    )
    repository.save(empty_cart(TableNumber("3")).activate(NOW))

    result = ListActiveCarts(repository).execute()

    assert [cart.tableNumber for cart in result.carts] == ["2", "1"]
