"""Midtrans Snap client.

Only transaction creation lives here. Status changes come back through the
notification webhook and never through polling the gateway.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

import httpx

from qrdine.application.ports.services import (
    PaymentGateway,
    PaymentGatewayConfigError,
    PaymentGatewayError,
    PaymentSession,
)
from qrdine.domain.order.entities import TAX_RATE_PERCENT, Order

SANDBOX_BASE_URL = "https://app.sandbox.midtrans.com"
PRODUCTION_BASE_URL = "https://app.midtrans.com"
SANDBOX_SERVER_KEY_PREFIX = "SB-Mid-server-"
SANDBOX_CLIENT_KEY_PREFIX = "SB-Mid-client-"
TRANSACTION_EXPIRY_MINUTES = 30
MAX_ITEM_NAME_LENGTH = 50

logger = logging.getLogger(__name__)


def public_base_url() -> str:
    return os.getenv("PUBLIC_BASE_URL", "http://localhost:3000").rstrip("/")


@dataclass(frozen=True)
class MidtransSettings:
    server_key: str
    client_key: str
    is_production: bool
    callback_base_url: str

    @classmethod
    def from_env(cls) -> MidtransSettings:
        return cls(
            server_key=os.getenv("MIDTRANS_SERVER_KEY", ""),
            client_key=os.getenv("MIDTRANS_CLIENT_KEY", ""),
            is_production=os.getenv("MIDTRANS_IS_PRODUCTION", "false").lower() == "true",
            callback_base_url=public_base_url(),
        )

    def validate(self) -> None:
        if not self.server_key or not self.client_key:
            raise PaymentGatewayConfigError("Midtrans API keys are missing")
        if self.is_production:
            return
        if not self.server_key.startswith(SANDBOX_SERVER_KEY_PREFIX):
            raise PaymentGatewayConfigError(
                f"sandbox server key should start with '{SANDBOX_SERVER_KEY_PREFIX}'"
            )
        if not self.client_key.startswith(SANDBOX_CLIENT_KEY_PREFIX):
            raise PaymentGatewayConfigError(
                f"sandbox client key should start with '{SANDBOX_CLIENT_KEY_PREFIX}'"
            )

    @property
    def base_url(self) -> str:
        return PRODUCTION_BASE_URL if self.is_production else SANDBOX_BASE_URL


def build_transaction_payload(order: Order, callback_base_url: str) -> dict[str, Any]:
    item_details: list[dict[str, Any]] = [
        {
            "id": str(line.item_id),
            "price": line.unit_price.amount,
            "quantity": line.quantity,
            "name": line.name[:MAX_ITEM_NAME_LENGTH],
        }
        for line in order.lines
    ]
    item_details.append(
        {
            "id": "tax",
            "price": order.tax.amount,
            "quantity": 1,
            "name": f"Pajak ({TAX_RATE_PERCENT}%)",
        }
    )
    table_number = str(order.table_number)
    customer_name = order.customer_name or f"Table-{table_number}"
    payment_pages = f"{callback_base_url}/tables/{table_number}/payment"
    return {
        "transaction_details": {
            "order_id": str(order.order_id),
            "gross_amount": order.total.amount,
        },
        "credit_card": {"secure": True},
        "item_details": item_details,
        "customer_details": {
            "first_name": customer_name,
            "phone": order.customer_phone or "",
        },
        "callbacks": {
            "finish": f"{payment_pages}/success",
            "error": f"{payment_pages}/error",
            "pending": f"{payment_pages}/pending",
        },
        "expiry": {"unit": "minutes", "duration": TRANSACTION_EXPIRY_MINUTES},
    }


class MidtransSnapGateway(PaymentGateway):
    def __init__(
        self,
        settings: MidtransSettings | None = None,
        client: httpx.Client | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._settings = settings or MidtransSettings.from_env()
        self._client = client
        self._timeout_seconds = timeout_seconds

    def create_transaction(self, order: Order) -> PaymentSession:
        self._settings.validate()
        payload = build_transaction_payload(order, self._settings.callback_base_url)
        url = f"{self._settings.base_url}/snap/v1/transactions"

        try:
            response = self._post(url, payload)
        except httpx.HTTPError as exc:
            raise PaymentGatewayError(f"payment gateway unreachable: {exc}") from exc

        if response.status_code >= 400:
            logger.warning(
                "midtrans_transaction_rejected",
                extra={"order_id": str(order.order_id), "status_code": response.status_code},
            )
            raise PaymentGatewayError(_error_message(response))

        body = _json_object(response)
        if body is None:
            logger.warning(
                "midtrans_transaction_unreadable",
                extra={"order_id": str(order.order_id), "status_code": response.status_code},
            )
            raise PaymentGatewayError("invalid payment response: body is not a JSON object")
        token = body.get("token")
        redirect_url = body.get("redirect_url")
        if not token or not redirect_url:
            raise PaymentGatewayError("invalid payment response: missing token")
        return PaymentSession(token=str(token), redirect_url=str(redirect_url))

    def _post(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        auth = httpx.BasicAuth(self._settings.server_key, "")
        headers = {"Accept": "application/json"}
        if self._client is not None:
            return self._client.post(url, json=payload, auth=auth, headers=headers)
        with httpx.Client(timeout=self._timeout_seconds) as client:
            return client.post(url, json=payload, auth=auth, headers=headers)


def _json_object(response: httpx.Response) -> dict[str, Any] | None:
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _error_message(response: httpx.Response) -> str:
    body = _json_object(response) or {}
    messages = body.get("error_messages") or []
    if messages:
        return ", ".join(str(message) for message in messages)
    return f"payment gateway returned HTTP {response.status_code}"
