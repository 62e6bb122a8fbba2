from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class MoneyResponse(BaseModel):
    amount: int
    currency: str


class OrderLineResponse(BaseModel):
    itemId: str
    name: str
    quantity: int
    unitPrice: MoneyResponse
    lineTotal: MoneyResponse


class OrderResponse(BaseModel):
    orderId: str
    tableNumber: str
    status: str
    lines: list[OrderLineResponse] = Field(default_factory=list)
    subtotal: MoneyResponse
    tax: MoneyResponse
    total: MoneyResponse
    paymentMethod: str
    customerName: str | None = None
    customerPhone: str | None = None
    paymentToken: str | None = None
    paymentRedirectUrl: str | None = None
    createdAt: datetime
    updatedAt: datetime


class OrdersResponse(BaseModel):
    orders: list[OrderResponse] = Field(default_factory=list)


class CartItemResponse(BaseModel):
    id: str
    name: str
    price: int
    quantity: int


class CartResponse(BaseModel):
    tableNumber: str
    items: list[CartItemResponse] = Field(default_factory=list)
    isActive: bool
    status: str | None = None
    subtotal: int
    updatedAt: datetime | None = None


class CartsResponse(BaseModel):
    carts: list[CartResponse] = Field(default_factory=list)


class CheckoutResponse(BaseModel):
    success: bool = True
    orderId: str
    token: str
    redirectUrl: str
    amount: int


class PaymentNotificationResponse(BaseModel):
    success: bool
    message: str
    orderId: str | None = None
    status: str | None = None


class TableResponse(BaseModel):
    tableId: str
    number: str
    name: str
    capacity: int
    location: str
    status: str
    activeOrderId: str | None = None
    hasQrCode: bool
    createdAt: datetime
    updatedAt: datetime


class TablesResponse(BaseModel):
    tables: list[TableResponse] = Field(default_factory=list)


class TableInfoResponse(BaseModel):
    tableId: str
    number: str
    name: str


class QrCodeResponse(BaseModel):
    qrCodeDataUrl: str
    qrData: str
    qrCodeBase64: str
    generatedAt: datetime
    tableInfo: TableInfoResponse
    isExisting: bool


class QrCodeEnvelope(BaseModel):
    success: bool = True
    message: str
    data: QrCodeResponse | None = None


class NutritionResponse(BaseModel):
    calories: int
    protein: float
    carbs: float
    fat: float
    fiber: float
    sugar: float


class MenuItemResponse(BaseModel):
    itemId: str
    name: str
    description: str
    composition: str | None = None
    category: str
    price: int
    stock: int
    status: str
    imageUrl: str | None = None
    nutrition: NutritionResponse | None = None
    createdAt: datetime
    updatedAt: datetime


class MenuResponse(BaseModel):
    items: list[MenuItemResponse] = Field(default_factory=list)


class ReviewResponse(BaseModel):
    reviewId: str
    orderId: str
    tableNumber: str
    rating: int
    comment: str
    createdAt: datetime


class CompleteOrderResponse(BaseModel):
    order: OrderResponse
    review: ReviewResponse | None = None


class ReviewsResponse(BaseModel):
    reviews: list[ReviewResponse] = Field(default_factory=list)


class ReviewStatsResponse(BaseModel):
    averageRating: float
    totalReviews: int
    distribution: dict[str, int]


class UserResponse(BaseModel):
    userId: str
    username: str
    email: str
    role: str


class UsersResponse(BaseModel):
    users: list[UserResponse] = Field(default_factory=list)


class LoginResponse(BaseModel):
    accessToken: str


class ProfileResponse(BaseModel):
    user: UserResponse


class ContactResponse(BaseModel):
    phone: str = ""
    email: str = ""
    website: str = ""
    instagram: str = ""
    facebook: str = ""
    twitter: str = ""
    whatsapp: str = ""


class RestaurantResponse(BaseModel):
    restaurantId: str
    name: str
    address: str
    tagline: str
    logoUrl: str
    coverImageUrl: str
    description: str
    contact: ContactResponse


class RestaurantsResponse(BaseModel):
    restaurants: list[RestaurantResponse] = Field(default_factory=list)


class UploadResponse(BaseModel):
    url: str


class MessageResponse(BaseModel):
    message: str
