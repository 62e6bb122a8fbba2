from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from qrdine.domain.common.errors import DomainValidationError
from qrdine.domain.common.ids import MenuItemId

NUTRITION_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar")


class MenuItemStatus(str, Enum):
    AVAILABLE = "available"
    SOLD_OUT = "sold_out"


def round_one_decimal(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


@dataclass(frozen=True)
class Nutrition:
    calories: int
    protein: float
    carbs: float
    fat: float
    fiber: float
    sugar: float

    def __post_init__(self) -> None:
        for name in NUTRITION_FIELDS:
            if getattr(self, name) < 0:
                raise DomainValidationError(f"{name} must be >= 0")

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> Nutrition:
        """Build from loosely typed data, coercing junk to zero."""

        def number(key: str) -> float:
            try:
                value = float(raw.get(key) or 0)
            except (TypeError, ValueError):
                return 0.0
            if math.isnan(value) or value < 0:
                return 0.0
            return value

        return cls(
            calories=int(math.floor(number("calories") + 0.5)),
            protein=round_one_decimal(number("protein")),
            carbs=round_one_decimal(number("carbs")),
            fat=round_one_decimal(number("fat")),
            fiber=round_one_decimal(number("fiber")),
            sugar=round_one_decimal(number("sugar")),
        )

    def to_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in NUTRITION_FIELDS}


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    name: str
    description: str
    category: str
    price: int
    stock: int
    created_at: datetime
    updated_at: datetime
    composition: str | None = None
    image_url: str | None = None
    nutrition: Nutrition | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise DomainValidationError("name must be non-empty")
        if self.price < 0:
            raise DomainValidationError("price must be >= 0")
        if self.stock < 0:
            raise DomainValidationError("stock must be >= 0")

    @property
    def status(self) -> MenuItemStatus:
        return MenuItemStatus.AVAILABLE if self.stock > 0 else MenuItemStatus.SOLD_OUT

    @property
    def is_available(self) -> bool:
        return self.status == MenuItemStatus.AVAILABLE
