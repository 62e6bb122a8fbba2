from __future__ import annotations

from dataclasses import asdict

from qrdine.application.dto.responses import ContactResponse, RestaurantResponse
from qrdine.domain.restaurant.entities import RestaurantProfile


def to_restaurant_response(profile: RestaurantProfile) -> RestaurantResponse:
    return RestaurantResponse(
        restaurantId=str(profile.restaurant_id),
        name=profile.name,
        address=profile.address,
        tagline=profile.tagline,
        logoUrl=profile.logo_url,
        coverImageUrl=profile.cover_image_url,
        description=profile.description,
        contact=ContactResponse(**asdict(profile.contact)),
    )
