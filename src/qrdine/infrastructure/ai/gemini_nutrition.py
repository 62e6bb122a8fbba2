from __future__ import annotations

import json
import os
import re
from typing import Any

import httpx

from qrdine.application.ports.services import NutritionService, NutritionServiceError
from qrdine.domain.menu.entities import Nutrition

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-1.5-flash"

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$")

_PROMPT = """
Analisis komposisi makanan berikut dan berikan informasi nutrisi per porsi
dalam format JSON yang tepat:

Komposisi: {composition}

Berikan response dalam format JSON berikut
(hanya JSON murni, tanpa markdown atau teks tambahan):
{{
  "calories": number,
  "protein": number,
  "carbs": number,
  "fat": number,
  "fiber": number,
  "sugar": number
}}

Panduan estimasi:
- Nasi 200g = sekitar 260 kalori, 5g protein, 53g karbo
- Telur 1 butir (50g) = sekitar 70 kalori, 6g protein, 0.5g karbo, 5g lemak
- Ayam 50g = sekitar 80 kalori, 15g protein, 0g karbo, 2g lemak
- Udang 30g = sekitar 25 kalori, 5g protein, 0g karbo, 0.3g lemak
- Kecap manis 1 sdm = sekitar 15 kalori, 0.5g protein, 3g karbo
- Minyak 1 sdm = sekitar 120 kalori, 0g protein, 0g karbo, 14g lemak

Berikan nilai nutrisi total yang realistis untuk makanan Indonesia.
Gunakan angka bulat untuk kalori, desimal 1 digit untuk yang lain.
"""


def strip_code_fences(text: str) -> str:
    return _FENCE_PATTERN.sub("", text.strip()).strip()


def parse_nutrition_text(text: str) -> Nutrition:
    try:
        raw = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as exc:
        raise NutritionServiceError("model response is not valid JSON") from exc
    if not isinstance(raw, dict):
        raise NutritionServiceError("model response is not a JSON object")
    return Nutrition.from_mapping(raw)


class GeminiNutritionService(NutritionService):
    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: httpx.Client | None = None,
        timeout_seconds: float = 15.0,
    ) -> None:
        self._api_key = api_key if api_key is not None else os.getenv("GEMINI_API_KEY", "")
        self._model = model or os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
        self._client = client
        self._timeout_seconds = timeout_seconds

    def estimate(self, composition: str) -> Nutrition:
        if not self._api_key:
            raise NutritionServiceError("GEMINI_API_KEY is not set")

        url = f"{GEMINI_BASE_URL}/models/{self._model}:generateContent"
        payload: dict[str, Any] = {
            "contents": [{"parts": [{"text": _PROMPT.format(composition=composition)}]}],
            "generationConfig": {
                "temperature": 0.1,
                "topK": 1,
                "topP": 0.8,
                "maxOutputTokens": 1024,
            },
        }
        try:
            response = self._post(url, payload)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise NutritionServiceError(f"generative service request failed: {exc}") from exc

        return parse_nutrition_text(_candidate_text(response.json()))

    def _post(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        params = {"key": self._api_key}
        if self._client is not None:
            return self._client.post(url, params=params, json=payload)
        with httpx.Client(timeout=self._timeout_seconds) as client:
            return client.post(url, params=params, json=payload)


def _candidate_text(body: dict[str, Any]) -> str:
    try:
        parts = body["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as exc:
        raise NutritionServiceError("model response has no candidates") from exc
    return "".join(str(part.get("text", "")) for part in parts)
