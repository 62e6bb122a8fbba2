from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

from pydantic import ValidationError

from qrdine.application.dto.requests import MenuItemRequest, MenuItemUpdateRequest
from qrdine.application.dto.responses import MenuItemResponse, MenuResponse, MessageResponse
from qrdine.application.mappers.menu_mapper import to_menu_item_response, to_menu_response
from qrdine.application.ports.cache import CacheStore
from qrdine.application.ports.repositories import MenuRepository
from qrdine.application.use_cases.estimate_nutrition import EstimateNutrition
from qrdine.application.use_cases.validation import rejecting_invalid_input
from qrdine.domain.common.ids import MenuItemId
from qrdine.domain.menu.entities import MenuItem

MENU_CACHE_KEY = "menu:items"
_NULLABLE_FIELDS = frozenset({"composition", "image_url", "nutrition"})

logger = logging.getLogger(__name__)


class MenuItemNotFoundError(Exception):
    pass


def _load_item(repository: MenuRepository, item_id: MenuItemId) -> MenuItem:
    item = repository.get(item_id)
    if item is None:
        raise MenuItemNotFoundError(f"menu item {item_id} not found")
    return item


def invalidate_menu_cache(cache: CacheStore) -> None:
    try:
        cache.delete(MENU_CACHE_KEY)
    except Exception:
        logger.warning("menu_cache_invalidate_failed", exc_info=True)


class ListMenu:
    def __init__(
        self,
        repository: MenuRepository,
        cache: CacheStore,
        ttl_seconds: int = 300,
    ) -> None:
        self._repository = repository
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def _cache_get(self) -> str | None:
        try:
            return self._cache.get(MENU_CACHE_KEY)
        except Exception:
            return None

    def _cache_set(self, value: str) -> None:
        try:
            self._cache.set(MENU_CACHE_KEY, value, ttl_seconds=self._ttl_seconds)
        except Exception:
            return

    def execute(self) -> MenuResponse:
        payload = self._cache_get()
        if payload:
            try:
                return MenuResponse.model_validate_json(payload)
            except ValidationError:
                pass

        items = sorted(self._repository.list_all(), key=lambda item: (item.category, item.name))
        response = to_menu_response(items)
        self._cache_set(response.model_dump_json())
        return response


class GetMenuItem:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, item_id: MenuItemId) -> MenuItemResponse:
        return to_menu_item_response(_load_item(self._repository, item_id))


class CreateMenuItem:
    def __init__(
        self,
        repository: MenuRepository,
        cache: CacheStore,
        nutrition: EstimateNutrition,
    ) -> None:
        self._repository = repository
        self._cache = cache
        self._nutrition = nutrition

    def execute(self, request_dto: MenuItemRequest) -> MenuItemResponse:
        now = datetime.now(timezone.utc)
        composition = (request_dto.composition or "").strip() or None
        nutrition = self._nutrition.estimate(composition) if composition else None
        with rejecting_invalid_input():
            item = MenuItem(
                item_id=MenuItemId(f"itm_{uuid4().hex[:12]}"),
                name=request_dto.name.strip(),
                description=request_dto.description,
                category=request_dto.category.strip(),
                price=request_dto.price,
                stock=request_dto.stock,
                created_at=now,
                updated_at=now,
                composition=composition,
                image_url=request_dto.image_url,
                nutrition=nutrition,
            )
        self._repository.add(item)
        invalidate_menu_cache(self._cache)
        return to_menu_item_response(item)


class UpdateMenuItem:
    def __init__(
        self,
        repository: MenuRepository,
        cache: CacheStore,
        nutrition: EstimateNutrition,
    ) -> None:
        self._repository = repository
        self._cache = cache
        self._nutrition = nutrition

    def execute(self, item_id: MenuItemId, request_dto: MenuItemUpdateRequest) -> MenuItemResponse:
        item = _load_item(self._repository, item_id)
        changes = request_dto.model_dump(exclude_unset=True)
        if changes.get("name") is not None:
            changes["name"] = changes["name"].strip()
        if "composition" in changes:
            composition = (changes["composition"] or "").strip() or None
            changes["composition"] = composition
            if composition != item.composition:
                changes["nutrition"] = (
                    self._nutrition.estimate(composition) if composition else None
                )

        changes = {
            key: value
            for key, value in changes.items()
            if value is not None or key in _NULLABLE_FIELDS
        }
        with rejecting_invalid_input():
            updated = replace(item, **changes, updated_at=datetime.now(timezone.utc))
        self._repository.update(updated)
        invalidate_menu_cache(self._cache)
        return to_menu_item_response(updated)


class DeleteMenuItem:
    def __init__(self, repository: MenuRepository, cache: CacheStore) -> None:
        self._repository = repository
        self._cache = cache

    def execute(self, item_id: MenuItemId) -> MessageResponse:
        if not self._repository.delete(item_id):
            raise MenuItemNotFoundError(f"menu item {item_id} not found")
        invalidate_menu_cache(self._cache)
        return MessageResponse(message=f"menu item {item_id} deleted")
