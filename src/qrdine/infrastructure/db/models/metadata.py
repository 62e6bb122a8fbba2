from __future__ import annotations

from qrdine.infrastructure.db.models.base import Base
from qrdine.infrastructure.db.models.cart import CartModel
from qrdine.infrastructure.db.models.menu import MenuItemModel
from qrdine.infrastructure.db.models.order import OrderLineModel, OrderModel
from qrdine.infrastructure.db.models.restaurant import RestaurantModel
from qrdine.infrastructure.db.models.review import ReviewModel
from qrdine.infrastructure.db.models.table import DiningTableModel
from qrdine.infrastructure.db.models.user import UserModel

metadata = Base.metadata

__all__ = [
    "CartModel",
    "DiningTableModel",
    "MenuItemModel",
    "OrderLineModel",
    "OrderModel",
    "RestaurantModel",
    "ReviewModel",
    "UserModel",
    "metadata",
]
