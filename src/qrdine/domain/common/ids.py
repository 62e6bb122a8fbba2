from __future__ import annotations

from typing import NewType

OrderId = NewType("OrderId", str)
TableId = NewType("TableId", str)
TableNumber = NewType("TableNumber", str)
MenuItemId = NewType("MenuItemId", str)
ReviewId = NewType("ReviewId", str)
UserId = NewType("UserId", str)
RestaurantId = NewType("RestaurantId", str)
