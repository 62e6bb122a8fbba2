from __future__ import annotations

from dataclasses import replace
from uuid import uuid4

from qrdine.application.dto.requests import RestaurantRequest
from qrdine.application.dto.responses import RestaurantResponse, RestaurantsResponse
from qrdine.application.mappers.restaurant_mapper import to_restaurant_response
from qrdine.application.ports.repositories import RestaurantRepository
from qrdine.application.use_cases.validation import rejecting_invalid_input
from qrdine.domain.common.ids import RestaurantId
from qrdine.domain.restaurant.entities import RestaurantContact, RestaurantProfile


class RestaurantNotFoundError(Exception):
    pass


class DuplicateRestaurantError(Exception):
    pass


def _profile_from_request(
    restaurant_id: RestaurantId,
    request_dto: RestaurantRequest,
) -> RestaurantProfile:
    contact = request_dto.contact
    with rejecting_invalid_input():
        return RestaurantProfile(
            restaurant_id=restaurant_id,
            name=request_dto.name.strip(),
            address=request_dto.address.strip(),
            tagline=request_dto.tagline,
            logo_url=request_dto.logo_url,
            cover_image_url=request_dto.cover_image_url,
            description=request_dto.description,
            contact=RestaurantContact(**contact.model_dump()) if contact else RestaurantContact(),
        )


class CreateRestaurant:
    def __init__(self, repository: RestaurantRepository) -> None:
        self._repository = repository

    def execute(self, request_dto: RestaurantRequest) -> RestaurantResponse:
        if self._repository.name_exists(request_dto.name.strip()):
            raise DuplicateRestaurantError(f"restaurant {request_dto.name!r} already exists")
        profile = _profile_from_request(RestaurantId(f"rst_{uuid4().hex[:12]}"), request_dto)
        self._repository.add(profile)
        return to_restaurant_response(profile)


class ListRestaurants:
    def __init__(self, repository: RestaurantRepository) -> None:
        self._repository = repository

    def execute(self) -> RestaurantsResponse:
        return RestaurantsResponse(
            restaurants=[to_restaurant_response(item) for item in self._repository.list_all()]
        )


class GetRestaurant:
    def __init__(self, repository: RestaurantRepository) -> None:
        self._repository = repository

    def execute(self, restaurant_id: RestaurantId) -> RestaurantResponse:
        profile = self._repository.get(restaurant_id)
        if profile is None:
            raise RestaurantNotFoundError(f"restaurant {restaurant_id} not found")
        return to_restaurant_response(profile)


class UpdateRestaurant:
    def __init__(self, repository: RestaurantRepository) -> None:
        self._repository = repository

    def execute(
        self,
        restaurant_id: RestaurantId,
        request_dto: RestaurantRequest,
    ) -> RestaurantResponse:
        current = self._repository.get(restaurant_id)
        if current is None:
            raise RestaurantNotFoundError(f"restaurant {restaurant_id} not found")

        name = request_dto.name.strip()
        if name.lower() != current.name.lower() and self._repository.name_exists(name):
            raise DuplicateRestaurantError(f"restaurant {name!r} already exists")

        updated = _profile_from_request(restaurant_id, request_dto)
        if request_dto.contact is None:
            updated = replace(updated, contact=current.contact)
        self._repository.update(updated)
        return to_restaurant_response(updated)
