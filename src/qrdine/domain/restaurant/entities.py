from __future__ import annotations

from dataclasses import dataclass, field

from qrdine.domain.common.errors import DomainValidationError
from qrdine.domain.common.ids import RestaurantId

MAX_DESCRIPTION_LENGTH = 500


@dataclass(frozen=True)
class RestaurantContact:
    phone: str = ""
    email: str = ""
    website: str = ""
    instagram: str = ""
    facebook: str = ""
    twitter: str = ""
    whatsapp: str = ""


@dataclass(frozen=True)
class RestaurantProfile:
    restaurant_id: RestaurantId
    name: str
    address: str
    tagline: str = ""
    logo_url: str = ""
    cover_image_url: str = ""
    description: str = ""
    contact: RestaurantContact = field(default_factory=RestaurantContact)

    def __post_init__(self) -> None:
        if len(self.name.strip()) < 2:
            raise DomainValidationError("name must be at least 2 characters long")
        if len(self.address.strip()) < 5:
            raise DomainValidationError("address must be at least 5 characters long")
        if len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise DomainValidationError(
                f"description must be at most {MAX_DESCRIPTION_LENGTH} characters"
            )
