from __future__ import annotations

from fastapi import APIRouter, Depends

from qrdine.api.security import Principal, require_staff
from qrdine.application.dto.requests import AddCartItemRequest, UpdateCartItemRequest
from qrdine.application.dto.responses import CartResponse, CartsResponse
from qrdine.application.use_cases.cart_items import (
    ActivateCart,
    AddCartItem,
    ClearCart,
    GetCart,
    ListActiveCarts,
    RemoveCartItem,
    UpdateCartItem,
)
from qrdine.domain.common.ids import MenuItemId, TableNumber
from qrdine.infrastructure.db.repositories.cart_repo import SqlAlchemyCartRepository

router = APIRouter(tags=["carts"])


def _get_cart_use_case() -> GetCart:
    return GetCart(cart_repository=SqlAlchemyCartRepository())


def _add_cart_item_use_case() -> AddCartItem:
    return AddCartItem(cart_repository=SqlAlchemyCartRepository())


def _update_cart_item_use_case() -> UpdateCartItem:
    return UpdateCartItem(cart_repository=SqlAlchemyCartRepository())


def _remove_cart_item_use_case() -> RemoveCartItem:
    return RemoveCartItem(cart_repository=SqlAlchemyCartRepository())


def _clear_cart_use_case() -> ClearCart:
    return ClearCart(cart_repository=SqlAlchemyCartRepository())


def _activate_cart_use_case() -> ActivateCart:
    return ActivateCart(cart_repository=SqlAlchemyCartRepository())


def _list_active_carts_use_case() -> ListActiveCarts:
    return ListActiveCarts(cart_repository=SqlAlchemyCartRepository())


@router.get("/v1/carts", response_model=CartsResponse)
def list_active_carts(_: Principal = Depends(require_staff)) -> CartsResponse:
    return _list_active_carts_use_case().execute()


@router.get("/v1/carts/{table_number}", response_model=CartResponse)
def get_cart(table_number: str) -> CartResponse:
    return _get_cart_use_case().execute(table_number=TableNumber(table_number))


@router.post("/v1/carts/{table_number}/items", response_model=CartResponse)
def add_cart_item(table_number: str, request_dto: AddCartItemRequest) -> CartResponse:
    return _add_cart_item_use_case().execute(
        table_number=TableNumber(table_number),
        request_dto=request_dto,
    )


@router.patch("/v1/carts/{table_number}/items/{item_id}", response_model=CartResponse)
def update_cart_item(
    table_number: str,
    item_id: str,
    request_dto: UpdateCartItemRequest,
) -> CartResponse:
    return _update_cart_item_use_case().execute(
        table_number=TableNumber(table_number),
        item_id=MenuItemId(item_id),
        quantity=request_dto.quantity,
    )


@router.delete("/v1/carts/{table_number}/items/{item_id}", response_model=CartResponse)
def remove_cart_item(table_number: str, item_id: str) -> CartResponse:
    return _remove_cart_item_use_case().execute(
        table_number=TableNumber(table_number),
        item_id=MenuItemId(item_id),
    )


@router.delete("/v1/carts/{table_number}", response_model=CartResponse)
def clear_cart(table_number: str) -> CartResponse:
    return _clear_cart_use_case().execute(table_number=TableNumber(table_number))


@router.post("/v1/carts/{table_number}/activate", response_model=CartResponse)
def activate_cart(table_number: str) -> CartResponse:
    return _activate_cart_use_case().execute(table_number=TableNumber(table_number))
