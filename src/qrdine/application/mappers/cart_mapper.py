from __future__ import annotations

from qrdine.application.dto.responses import CartItemResponse, CartResponse
from qrdine.domain.cart.entities import Cart


def to_cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        tableNumber=str(cart.table_number),
        items=[
            CartItemResponse(
                id=str(item.item_id),
                name=item.name,
                price=item.price,
                quantity=item.quantity,
            )
            for item in cart.items
        ],
        isActive=cart.is_active,
        status=cart.status.value if cart.status is not None else None,
        subtotal=cart.subtotal,
        updatedAt=cart.updated_at,
    )
