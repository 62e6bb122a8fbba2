from __future__ import annotations

from fastapi import APIRouter, Depends, status

from qrdine.api.security import Principal, require_admin
from qrdine.application.dto.requests import (
    MenuItemRequest,
    MenuItemUpdateRequest,
    NutritionEstimateRequest,
)
from qrdine.application.dto.responses import (
    MenuItemResponse,
    MenuResponse,
    MessageResponse,
    NutritionResponse,
)
from qrdine.application.use_cases.estimate_nutrition import EstimateNutrition
from qrdine.application.use_cases.manage_menu import (
    CreateMenuItem,
    DeleteMenuItem,
    GetMenuItem,
    ListMenu,
    UpdateMenuItem,
)
from qrdine.domain.common.ids import MenuItemId
from qrdine.infrastructure.ai.gemini_nutrition import GeminiNutritionService
from qrdine.infrastructure.cache.cache_store import RedisCacheStore, menu_cache_ttl_seconds
from qrdine.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository

router = APIRouter(tags=["menu"])


def _estimate_nutrition_use_case() -> EstimateNutrition:
    return EstimateNutrition(nutrition_service=GeminiNutritionService())


def _list_menu_use_case() -> ListMenu:
    return ListMenu(
        repository=SqlAlchemyMenuRepository(),
        cache=RedisCacheStore(),
        ttl_seconds=menu_cache_ttl_seconds(),
    )


def _get_menu_item_use_case() -> GetMenuItem:
    return GetMenuItem(repository=SqlAlchemyMenuRepository())


def _create_menu_item_use_case() -> CreateMenuItem:
    return CreateMenuItem(
        repository=SqlAlchemyMenuRepository(),
        cache=RedisCacheStore(),
        nutrition=_estimate_nutrition_use_case(),
    )


def _update_menu_item_use_case() -> UpdateMenuItem:
    return UpdateMenuItem(
        repository=SqlAlchemyMenuRepository(),
        cache=RedisCacheStore(),
        nutrition=_estimate_nutrition_use_case(),
    )


def _delete_menu_item_use_case() -> DeleteMenuItem:
    return DeleteMenuItem(repository=SqlAlchemyMenuRepository(), cache=RedisCacheStore())


@router.get("/v1/menu", response_model=MenuResponse)
def list_menu() -> MenuResponse:
    return _list_menu_use_case().execute()


@router.post("/v1/menu/nutrition", response_model=NutritionResponse)
def estimate_nutrition(
    request_dto: NutritionEstimateRequest,
    _: Principal = Depends(require_admin),
) -> NutritionResponse:
    return _estimate_nutrition_use_case().execute(request_dto.composition)


@router.get("/v1/menu/{item_id}", response_model=MenuItemResponse)
def get_menu_item(item_id: str) -> MenuItemResponse:
    return _get_menu_item_use_case().execute(item_id=MenuItemId(item_id))


@router.post(
    "/v1/menu",
    response_model=MenuItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_menu_item(
    request_dto: MenuItemRequest,
    _: Principal = Depends(require_admin),
) -> MenuItemResponse:
    return _create_menu_item_use_case().execute(request_dto)


@router.put("/v1/menu/{item_id}", response_model=MenuItemResponse)
def update_menu_item(
    item_id: str,
    request_dto: MenuItemUpdateRequest,
    _: Principal = Depends(require_admin),
) -> MenuItemResponse:
    return _update_menu_item_use_case().execute(
        item_id=MenuItemId(item_id),
        request_dto=request_dto,
    )


@router.delete("/v1/menu/{item_id}", response_model=MessageResponse)
def delete_menu_item(item_id: str, _: Principal = Depends(require_admin)) -> MessageResponse:
    return _delete_menu_item_use_case().execute(item_id=MenuItemId(item_id))
