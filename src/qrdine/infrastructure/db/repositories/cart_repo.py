from __future__ import annotations

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from qrdine.application.ports.repositories import CartRepository
from qrdine.domain.cart.entities import Cart, CartItem
from qrdine.domain.common.ids import MenuItemId, TableNumber
from qrdine.domain.order.entities import OrderStatus
from qrdine.infrastructure.db.models.cart import CartModel
from qrdine.infrastructure.db.repositories.utc import as_utc_or_none
from qrdine.infrastructure.db.session import get_engine


def cart_to_model(cart: Cart) -> CartModel:
    return CartModel(
        table_number=str(cart.table_number),
        items=[
            {
                "id": str(item.item_id),
                "name": item.name,
                "price": item.price,
                "quantity": item.quantity,
            }
            for item in cart.items
        ],
        is_active=cart.is_active,
        status=cart.status.value if cart.status is not None else None,
        created_at=cart.created_at,
        updated_at=cart.updated_at,
    )


def cart_to_domain(model: CartModel) -> Cart:
    return Cart(
        table_number=TableNumber(model.table_number),
        items=[
            CartItem(
                item_id=MenuItemId(str(raw["id"])),
                name=str(raw["name"]),
                price=int(raw["price"]),
                quantity=int(raw["quantity"]),
            )
            for raw in model.items or []
        ],
        is_active=bool(model.is_active),
        status=OrderStatus(model.status) if model.status else None,
        created_at=as_utc_or_none(model.created_at),
        updated_at=as_utc_or_none(model.updated_at),
    )


class SqlAlchemyCartRepository(CartRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, table_number: TableNumber) -> Cart | None:
        with Session(self._engine) as session:
            model = session.get(CartModel, str(table_number))
            if model is None:
                return None
            return cart_to_domain(model)

    def save(self, cart: Cart) -> None:
        with Session(self._engine) as session:
            session.merge(cart_to_model(cart))
            session.commit()

    def list_with_items(self) -> list[Cart]:
        statement = select(CartModel).order_by(CartModel.updated_at.desc())
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
            carts = [cart_to_domain(model) for model in models]
        return [cart for cart in carts if not cart.is_empty]
