from __future__ import annotations

from datetime import datetime, timezone

from qrdine.application.dto.requests import AddCartItemRequest
from qrdine.application.dto.responses import CartResponse, CartsResponse
from qrdine.application.mappers.cart_mapper import to_cart_response
from qrdine.application.ports.repositories import CartRepository
from qrdine.domain.cart.entities import Cart, empty_cart
from qrdine.domain.common.ids import MenuItemId, TableNumber


class _CartUseCase:
    def __init__(self, cart_repository: CartRepository) -> None:
        self._cart_repository = cart_repository

    def _load(self, table_number: TableNumber) -> Cart:
        return self._cart_repository.get(table_number) or empty_cart(table_number)

    def _save(self, cart: Cart) -> CartResponse:
        self._cart_repository.save(cart)
        return to_cart_response(cart)


class GetCart(_CartUseCase):
    def execute(self, table_number: TableNumber) -> CartResponse:
        return to_cart_response(self._load(table_number))


class AddCartItem(_CartUseCase):
    def execute(self, table_number: TableNumber, request_dto: AddCartItemRequest) -> CartResponse:
        item = request_dto.item
        cart = self._load(table_number).add_item(
            item_id=MenuItemId(item.id),
            name=item.name,
            price=item.price,
            now=datetime.now(timezone.utc),
        )
        return self._save(cart)


class UpdateCartItem(_CartUseCase):
    def execute(
        self,
        table_number: TableNumber,
        item_id: MenuItemId,
        quantity: int,
    ) -> CartResponse:
        cart = self._load(table_number).update_item(
            item_id=item_id,
            quantity=quantity,
            now=datetime.now(timezone.utc),
        )
        return self._save(cart)


class RemoveCartItem(_CartUseCase):
    def execute(self, table_number: TableNumber, item_id: MenuItemId) -> CartResponse:
        cart = self._load(table_number).remove_item(item_id, now=datetime.now(timezone.utc))
        return self._save(cart)


class ClearCart(_CartUseCase):
    def execute(self, table_number: TableNumber) -> CartResponse:
        return self._save(self._load(table_number).clear(now=datetime.now(timezone.utc)))


class ActivateCart(_CartUseCase):
    def execute(self, table_number: TableNumber) -> CartResponse:
        return self._save(self._load(table_number).activate(now=datetime.now(timezone.utc)))


class ListActiveCarts(_CartUseCase):
    def execute(self) -> CartsResponse:
        carts = sorted(
            self._cart_repository.list_with_items(),
            key=lambda cart: cart.updated_at or datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )
        return CartsResponse(carts=[to_cart_response(cart) for cart in carts])
