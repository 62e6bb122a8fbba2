from __future__ import annotations

from qrdine.application.dto.responses import (
    MenuItemResponse,
    MenuResponse,
    NutritionResponse,
)
from qrdine.domain.menu.entities import MenuItem, Nutrition


def to_nutrition_response(nutrition: Nutrition) -> NutritionResponse:
    return NutritionResponse(**nutrition.to_dict())


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        itemId=str(item.item_id),
        name=item.name,
        description=item.description,
        composition=item.composition,
        category=item.category,
        price=item.price,
        stock=item.stock,
        status=item.status.value,
        imageUrl=item.image_url,
        nutrition=to_nutrition_response(item.nutrition) if item.nutrition else None,
        createdAt=item.created_at,
        updatedAt=item.updated_at,
    )


def to_menu_response(items: list[MenuItem]) -> MenuResponse:
    return MenuResponse(items=[to_menu_item_response(item) for item in items])
