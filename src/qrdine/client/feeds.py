from __future__ import annotations

from typing import Callable

import httpx

from qrdine.application.dto.responses import OrderResponse, OrdersResponse
from qrdine.client.polling import Poller

CUSTOMER_ORDERS_INTERVAL_SECONDS = 3.0
TRANSACTION_HISTORY_INTERVAL_SECONDS = 5.0

OrdersCallback = Callable[[list[OrderResponse]], None]
ErrorCallback = Callable[[Exception], None]


async def _get_orders(
    client: httpx.AsyncClient,
    path: str,
    params: dict[str, str] | None = None,
) -> list[OrderResponse]:
    response = await client.get(path, params=params)
    response.raise_for_status()
    return OrdersResponse.model_validate(response.json()).orders


class CustomerOrderFeed:
    """Orders for one table, as shown on the diner's order status page."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        table_number: str,
        on_update: OrdersCallback | None = None,
        on_error: ErrorCallback | None = None,
        interval_seconds: float = CUSTOMER_ORDERS_INTERVAL_SECONDS,
    ) -> None:
        self._client = client
        self._table_number = table_number
        self.poller: Poller[list[OrderResponse]] = Poller(
            self.fetch,
            interval_seconds,
            on_result=on_update,
            on_error=on_error,
        )

    async def fetch(self) -> list[OrderResponse]:
        return await _get_orders(self._client, f"/v1/table-numbers/{self._table_number}/orders")


class TransactionHistoryFeed:
    """Completed orders for the staff transaction history screen.

    The client must already carry a staff or admin bearer token.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        on_update: OrdersCallback | None = None,
        on_error: ErrorCallback | None = None,
        interval_seconds: float = TRANSACTION_HISTORY_INTERVAL_SECONDS,
    ) -> None:
        self._client = client
        self.poller: Poller[list[OrderResponse]] = Poller(
            self.fetch,
            interval_seconds,
            on_result=on_update,
            on_error=on_error,
        )

    async def fetch(self) -> list[OrderResponse]:
        return await _get_orders(self._client, "/v1/orders", params={"status": "completed"})
