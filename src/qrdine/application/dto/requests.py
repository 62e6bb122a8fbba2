from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class CartItemPayload(CamelBaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    price: int = Field(ge=0)


class AddCartItemRequest(CamelBaseModel):
    item: CartItemPayload


class UpdateCartItemRequest(CamelBaseModel):
    quantity: int


class CheckoutRequest(CamelBaseModel):
    table_number: str = Field(min_length=1)
    customer_name: str | None = None
    customer_phone: str | None = None


class PaymentNotificationRequest(BaseModel):
    """Gateway callback body. Field names are the gateway's own."""

    model_config = ConfigDict(extra="allow")

    order_id: str | None = None
    transaction_status: str | None = None
    transaction_id: str | None = None
    payment_type: str | None = None
    fraud_status: str | None = None


class AdvanceOrderStatusRequest(CamelBaseModel):
    status: str


class ReviewInput(CamelBaseModel):
    rating: int = Field(ge=1, le=5)
    comment: str | None = None


class CompleteOrderRequest(CamelBaseModel):
    review: ReviewInput | None = None


class CreateReviewRequest(CamelBaseModel):
    order_id: str = Field(min_length=1)
    table_number: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    comment: str | None = None


class UpdateReviewRequest(CamelBaseModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    comment: str | None = None


class TableRequest(CamelBaseModel):
    number: str = Field(min_length=1)
    name: str = Field(min_length=1)
    capacity: int = Field(ge=1)
    location: str = Field(min_length=1)
    status: Literal["available", "occupied", "reserved"] | None = None


class GenerateQrRequest(CamelBaseModel):
    action: str = "generate-qr"
    force_regenerate: bool = False


class MenuItemRequest(CamelBaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    composition: str | None = None
    category: str = Field(min_length=1)
    price: int = Field(ge=0)
    stock: int = Field(ge=0)
    image_url: str | None = None


class MenuItemUpdateRequest(CamelBaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    composition: str | None = None
    category: str | None = Field(default=None, min_length=1)
    price: int | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    image_url: str | None = None


_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CreateUserRequest(CamelBaseModel):
    username: str = Field(min_length=2)
    email: str = Field(pattern=_EMAIL_PATTERN)
    password: str = Field(min_length=8)
    role: Literal["admin", "staff"]


class UpdateUserRequest(CamelBaseModel):
    username: str | None = Field(default=None, min_length=2)
    email: str | None = Field(default=None, pattern=_EMAIL_PATTERN)
    password: str | None = Field(default=None, min_length=8)
    role: Literal["admin", "staff"] | None = None


class LoginRequest(CamelBaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ContactRequest(CamelBaseModel):
    phone: str = ""
    email: str = Field(default="", pattern=r"^$|" + _EMAIL_PATTERN)
    website: str = ""
    instagram: str = ""
    facebook: str = ""
    twitter: str = ""
    whatsapp: str = ""


class RestaurantRequest(CamelBaseModel):
    name: str = Field(min_length=2)
    address: str = Field(min_length=5)
    tagline: str = ""
    logo_url: str = ""
    cover_image_url: str = ""
    description: str = Field(default="", max_length=500)
    contact: ContactRequest | None = None


class NutritionEstimateRequest(CamelBaseModel):
    composition: str = Field(min_length=1)
