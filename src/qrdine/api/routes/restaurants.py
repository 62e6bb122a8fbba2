from __future__ import annotations

from fastapi import APIRouter, Depends, status

from qrdine.api.security import Principal, require_admin
from qrdine.application.dto.requests import RestaurantRequest
from qrdine.application.dto.responses import RestaurantResponse, RestaurantsResponse
from qrdine.application.use_cases.restaurant_profile import (
    CreateRestaurant,
    GetRestaurant,
    ListRestaurants,
    UpdateRestaurant,
)
from qrdine.domain.common.ids import RestaurantId
from qrdine.infrastructure.db.repositories.restaurant_repo import SqlAlchemyRestaurantRepository

router = APIRouter(tags=["restaurants"])


def _create_restaurant_use_case() -> CreateRestaurant:
    return CreateRestaurant(repository=SqlAlchemyRestaurantRepository())


def _list_restaurants_use_case() -> ListRestaurants:
    return ListRestaurants(repository=SqlAlchemyRestaurantRepository())


def _get_restaurant_use_case() -> GetRestaurant:
    return GetRestaurant(repository=SqlAlchemyRestaurantRepository())


def _update_restaurant_use_case() -> UpdateRestaurant:
    return UpdateRestaurant(repository=SqlAlchemyRestaurantRepository())


@router.get("/v1/restaurants", response_model=RestaurantsResponse)
def list_restaurants() -> RestaurantsResponse:
    return _list_restaurants_use_case().execute()


@router.post(
    "/v1/restaurants",
    response_model=RestaurantResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_restaurant(
    request_dto: RestaurantRequest,
    _: Principal = Depends(require_admin),
) -> RestaurantResponse:
    return _create_restaurant_use_case().execute(request_dto)


@router.get("/v1/restaurants/{restaurant_id}", response_model=RestaurantResponse)
def get_restaurant(restaurant_id: str) -> RestaurantResponse:
    return _get_restaurant_use_case().execute(restaurant_id=RestaurantId(restaurant_id))


@router.put("/v1/restaurants/{restaurant_id}", response_model=RestaurantResponse)
def update_restaurant(
    restaurant_id: str,
    request_dto: RestaurantRequest,
    _: Principal = Depends(require_admin),
) -> RestaurantResponse:
    return _update_restaurant_use_case().execute(
        restaurant_id=RestaurantId(restaurant_id),
        request_dto=request_dto,
    )
