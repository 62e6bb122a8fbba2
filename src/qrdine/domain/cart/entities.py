from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from qrdine.domain.common.errors import DomainValidationError
from qrdine.domain.common.ids import MenuItemId, TableNumber
from qrdine.domain.order.entities import OrderStatus


@dataclass(frozen=True)
class CartItem:
    item_id: MenuItemId
    name: str
    price: int
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise DomainValidationError("quantity must be >= 1")
        if self.price < 0:
            raise DomainValidationError("price must be >= 0")


@dataclass(frozen=True)
class Cart:
    """Per-table selection. One cart per table number, last writer wins."""

    table_number: TableNumber
    items: list[CartItem] = field(default_factory=list)
    is_active: bool = False
    status: OrderStatus | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def subtotal(self) -> int:
        return sum(item.price * item.quantity for item in self.items)

    def find(self, item_id: MenuItemId) -> CartItem | None:
        for item in self.items:
            if item.item_id == item_id:
                return item
        return None

    def add_item(self, item_id: MenuItemId, name: str, price: int, now: datetime) -> Cart:
        existing = self.find(item_id)
        if existing is None:
            items = [*self.items, CartItem(item_id=item_id, name=name, price=price, quantity=1)]
        else:
            items = [
                replace(item, quantity=item.quantity + 1) if item.item_id == item_id else item
                for item in self.items
            ]
        return self._touch(items=items, now=now)

    def update_item(self, item_id: MenuItemId, quantity: int, now: datetime) -> Cart:
        if quantity <= 0:
            return self.remove_item(item_id, now)
        items = [
            replace(item, quantity=quantity) if item.item_id == item_id else item
            for item in self.items
        ]
        return self._touch(items=items, now=now)

    def remove_item(self, item_id: MenuItemId, now: datetime) -> Cart:
        return self._touch(items=[item for item in self.items if item.item_id != item_id], now=now)

    def clear(self, now: datetime) -> Cart:
        return self._touch(items=[], now=now)

    def activate(self, now: datetime) -> Cart:
        touched = self._touch(items=self.items, now=now)
        return replace(touched, is_active=True, status=OrderStatus.QUEUE)

    def mirror_status(self, status: OrderStatus, now: datetime) -> Cart:
        return replace(self._touch(items=self.items, now=now), status=status)

    def _touch(self, items: list[CartItem], now: datetime) -> Cart:
        return replace(self, items=items, created_at=self.created_at or now, updated_at=now)


def empty_cart(table_number: TableNumber) -> Cart:
    return Cart(table_number=table_number)
