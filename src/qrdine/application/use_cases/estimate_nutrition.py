from __future__ import annotations

import logging

from qrdine.application.dto.responses import NutritionResponse
from qrdine.application.mappers.menu_mapper import to_nutrition_response
from qrdine.application.metrics.order_lifecycle import record_nutrition_fallback
from qrdine.application.ports.services import NutritionService
from qrdine.domain.menu.entities import Nutrition
from qrdine.domain.menu.nutrition import estimate_nutrition_from_keywords

logger = logging.getLogger(__name__)


class EmptyCompositionError(Exception):
    pass


class EstimateNutrition:
    """Asks the generative service first and falls back to keyword rules.

    Never fails for a non-empty composition.
    """

    def __init__(self, nutrition_service: NutritionService | None) -> None:
        self._nutrition_service = nutrition_service

    def estimate(self, composition: str) -> Nutrition:
        if not composition.strip():
            raise EmptyCompositionError("composition must be non-empty")

        if self._nutrition_service is not None:
            try:
                return self._nutrition_service.estimate(composition)
            except Exception:
                logger.warning("nutrition_service_failed", exc_info=True)

        record_nutrition_fallback()
        return estimate_nutrition_from_keywords(composition)

    def execute(self, composition: str) -> NutritionResponse:
        return to_nutrition_response(self.estimate(composition))
