from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from qrdine.domain.menu.entities import Nutrition
from qrdine.domain.order.entities import Order


@dataclass(frozen=True)
class PaymentSession:
    token: str
    redirect_url: str


class PaymentGateway(Protocol):
    def create_transaction(self, order: Order) -> PaymentSession: ...


class NutritionService(Protocol):
    def estimate(self, composition: str) -> Nutrition: ...


class ImageHost(Protocol):
    def upload(self, filename: str, content: bytes, content_type: str) -> str: ...


class QrEncoder(Protocol):
    def encode_png(self, data: str) -> bytes: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, claims: dict[str, Any]) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...


class PaymentGatewayError(Exception):
    pass


class PaymentGatewayConfigError(PaymentGatewayError):
    pass


class NutritionServiceError(Exception):
    pass


class ImageHostError(Exception):
    pass


class InvalidTokenError(Exception):
    pass
