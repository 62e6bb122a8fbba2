from __future__ import annotations

import json
import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrdine.application.ports.services import NutritionServiceError
from qrdine.application.use_cases.estimate_nutrition import (
    EmptyCompositionError,
    EstimateNutrition,
)
from qrdine.domain.menu.entities import NUTRITION_FIELDS, Nutrition
from qrdine.domain.menu.nutrition import estimate_nutrition_from_keywords
from qrdine.infrastructure.ai.gemini_nutrition import (
    GeminiNutritionService,
    parse_nutrition_text,
    strip_code_fences,
)


class FailingNutritionService:
    def estimate(self, composition: str) -> Nutrition:
        raise NutritionServiceError("quota exceeded")


class FixedNutritionService:
    def estimate(self, composition: str) -> Nutrition:
        return Nutrition(calories=321, protein=1.5, carbs=2.5, fat=3.5, fiber=0.5, sugar=0.0)


def _gemini_body(text: str) -> dict[str, object]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_fallback_for_rice_and_chicken_is_complete() -> None:
    result = EstimateNutrition(FailingNutritionService()).execute("Nasi 200g, Ayam 50g")

    assert result.model_dump() == {
        "calories": 500,
        "protein": 27.0,
        "carbs": 65.0,
        "fat": 9.0,
        "fiber": 2.0,
        "sugar": 3.0,
    }


def test_fallback_matches_english_keywords() -> None:
    nutrition = estimate_nutrition_from_keywords("fried RICE with egg and vegetables")

    assert nutrition.calories == 200 + 200 + 70 + 20
    assert nutrition.fiber == 5.0


def test_fallback_without_keywords_returns_base_values() -> None:
    nutrition = estimate_nutrition_from_keywords("teh manis")

    assert nutrition.to_dict() == {
        "calories": 200,
        "protein": 8.0,
        "carbs": 25.0,
        "fat": 6.0,
        "fiber": 2.0,
        "sugar": 3.0,
    }


def test_service_result_is_used_when_available() -> None:
    result = EstimateNutrition(FixedNutritionService()).estimate("anything")

    assert result.calories == 321


def test_missing_service_uses_fallback() -> None:
    result = EstimateNutrition(None).estimate("udang")

    assert all(getattr(result, field) >= 0 for field in NUTRITION_FIELDS)
    assert result.calories == 230


def test_blank_composition_is_rejected() -> None:
    with pytest.raises(EmptyCompositionError):
        EstimateNutrition(None).estimate("   ")


def test_nutrition_from_mapping_coerces_junk() -> None:
    nutrition = Nutrition.from_mapping(
        {"calories": "412.6", "protein": -3, "carbs": "abc", "fat": 12.345, "fiber": None}
    )

    assert nutrition.to_dict() == {
        "calories": 413,
        "protein": 0.0,
        "carbs": 0.0,
        "fat": 12.3,
        "fiber": 0.0,
        "sugar": 0.0,
    }


def test_parse_nutrition_text_strips_markdown_fences() -> None:
    text = '```json\n{"calories": 520, "protein": 21.44, "carbs": 70, "fat": 15, "fiber": 3, '
    text += '"sugar": 6}\n```'

    assert strip_code_fences("```json\n{}\n```") == "{}"
    assert parse_nutrition_text(text).protein == 21.4


def test_parse_nutrition_text_rejects_prose() -> None:
    with pytest.raises(NutritionServiceError):
        parse_nutrition_text("I think about 500 calories")


def test_gemini_service_posts_prompt_and_parses_candidate() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        answer = json.dumps(
            {"calories": 480, "protein": 20, "carbs": 60, "fat": 14, "fiber": 2, "sugar": 5}
        )
        return httpx.Response(200, json=_gemini_body(answer))

    client = httpx.Client(transport=httpx.MockTransport(handler))
    service = GeminiNutritionService(api_key="test-key", model="gemini-test", client=client)

    nutrition = service.estimate("Nasi 200g, Telur 1 butir")

    assert nutrition.calories == 480
    request = seen[0]
    assert request.url.path.endswith("/models/gemini-test:generateContent")
    assert request.url.params["key"] == "test-key"
    prompt = json.loads(request.content)["contents"][0]["parts"][0]["text"]
    assert "Nasi 200g, Telur 1 butir" in prompt


def test_gemini_http_error_falls_back_to_keywords() -> None:
    client = httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(429, json={}))
    )
    service = GeminiNutritionService(api_key="test-key", client=client)

    with pytest.raises(NutritionServiceError):
        service.estimate("Nasi")
    assert EstimateNutrition(service).estimate("Nasi").calories == 400


def test_gemini_without_api_key_fails_fast() -> None:
    with pytest.raises(NutritionServiceError):
        GeminiNutritionService(api_key="").estimate("Nasi")
