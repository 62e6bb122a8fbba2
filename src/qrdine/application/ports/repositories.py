from __future__ import annotations

from typing import Protocol

from qrdine.domain.cart.entities import Cart
from qrdine.domain.common.ids import (
    MenuItemId,
    OrderId,
    RestaurantId,
    ReviewId,
    TableId,
    TableNumber,
    UserId,
)
from qrdine.domain.menu.entities import MenuItem
from qrdine.domain.order.entities import Order, OrderStatus
from qrdine.domain.restaurant.entities import RestaurantProfile
from qrdine.domain.review.entities import Review
from qrdine.domain.table.entities import DiningTable
from qrdine.domain.user.entities import User


class OrderRepository(Protocol):
    def add(self, order: Order) -> None: ...

    def get(self, order_id: OrderId) -> Order | None: ...

    def delete(self, order_id: OrderId) -> bool: ...

    def update_status_with_version(
        self,
        order: Order,
        expected_version: int,
    ) -> Order: ...

    def settle_payment(
        self,
        order: Order,
        expected_version: int,
        cart: Cart,
    ) -> Order: ...

    def list_by_statuses(self, statuses: frozenset[OrderStatus] | None) -> list[Order]: ...

    def list_for_table(self, table_number: TableNumber) -> list[Order]: ...


class CartRepository(Protocol):
    def get(self, table_number: TableNumber) -> Cart | None: ...

    def save(self, cart: Cart) -> None: ...

    def list_with_items(self) -> list[Cart]: ...


class TableRepository(Protocol):
    def get(self, table_id: TableId) -> DiningTable | None: ...

    def get_by_number(self, number: TableNumber) -> DiningTable | None: ...

    def list_all(self) -> list[DiningTable]: ...

    def add(self, table: DiningTable) -> None: ...

    def update(self, table: DiningTable) -> None: ...

    def delete(self, table_id: TableId) -> bool: ...


class MenuRepository(Protocol):
    def get(self, item_id: MenuItemId) -> MenuItem | None: ...

    def list_all(self) -> list[MenuItem]: ...

    def add(self, item: MenuItem) -> None: ...

    def update(self, item: MenuItem) -> None: ...

    def delete(self, item_id: MenuItemId) -> bool: ...


class ReviewRepository(Protocol):
    def get(self, review_id: ReviewId) -> Review | None: ...

    def list_all(
        self,
        table_number: TableNumber | None = None,
        order_id: OrderId | None = None,
    ) -> list[Review]: ...

    def add(self, review: Review) -> None: ...

    def update(self, review: Review) -> None: ...

    def delete(self, review_id: ReviewId) -> bool: ...

    def ratings(self) -> list[int]: ...


class UserRepository(Protocol):
    def get(self, user_id: UserId) -> User | None: ...

    def find_by_email(self, email: str) -> User | None: ...

    def find_by_username(self, username: str) -> User | None: ...

    def exists(self, email: str, username: str) -> bool: ...

    def list_all(self) -> list[User]: ...

    def add(self, user: User) -> None: ...

    def update(self, user: User) -> None: ...

    def delete(self, user_id: UserId) -> bool: ...


class RestaurantRepository(Protocol):
    def get(self, restaurant_id: RestaurantId) -> RestaurantProfile | None: ...

    def name_exists(self, name: str) -> bool: ...

    def list_all(self) -> list[RestaurantProfile]: ...

    def add(self, profile: RestaurantProfile) -> None: ...

    def update(self, profile: RestaurantProfile) -> None: ...


class OptimisticConcurrencyError(Exception):
    pass
