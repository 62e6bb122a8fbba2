"""Keyword based nutrition estimate used when the generative service fails."""

from __future__ import annotations

from dataclasses import dataclass

from qrdine.domain.menu.entities import Nutrition, round_one_decimal


@dataclass(frozen=True)
class _Increment:
    keywords: tuple[str, ...]
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0


_BASE = _Increment(
    keywords=(),
    calories=200,
    protein=8.0,
    carbs=25.0,
    fat=6.0,
    fiber=2.0,
    sugar=3.0,
)

_INCREMENTS = (
    _Increment(keywords=("nasi", "rice"), calories=200, carbs=40, protein=4),
    _Increment(keywords=("ayam", "chicken"), calories=100, protein=15, fat=3),
    _Increment(keywords=("telur", "egg"), calories=70, protein=6, fat=5),
    _Increment(keywords=("udang", "shrimp"), calories=30, protein=6, fat=0.5),
    _Increment(keywords=("minyak", "oil"), calories=100, fat=12),
    _Increment(keywords=("sayur", "vegetable"), calories=20, fiber=3, carbs=5),
)


def estimate_nutrition_from_keywords(composition: str) -> Nutrition:
    lowered = composition.lower()
    totals = {
        "calories": _BASE.calories,
        "protein": _BASE.protein,
        "carbs": _BASE.carbs,
        "fat": _BASE.fat,
        "fiber": _BASE.fiber,
        "sugar": _BASE.sugar,
    }
    for increment in _INCREMENTS:
        if any(keyword in lowered for keyword in increment.keywords):
            for key in totals:
                totals[key] += getattr(increment, key)

    return Nutrition(
        calories=int(totals["calories"]),
        protein=round_one_decimal(totals["protein"]),
        carbs=round_one_decimal(totals["carbs"]),
        fat=round_one_decimal(totals["fat"]),
        fiber=round_one_decimal(totals["fiber"]),
        sugar=round_one_decimal(totals["sugar"]),
    )
